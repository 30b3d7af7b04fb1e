"""
prompts/infographic_prompts.py — Prompt templates for InfographicAgent.
"""

INFOGRAPHIC_SYSTEM_INSTRUCTION = (
    "You are an information designer. "
    "You turn any topic into concise, factual, visually structured content. "
    "Prefer concrete numbers and short phrases over long prose."
)

# ── Infographic Generation ──────────────────────────────────
INFOGRAPHIC_GENERATION_PROMPT = """Create exactly four infographics about the topic below, one of each type, in this order: statistical, process, comparison, educational.

**Topic:** {topic}

**Common fields (every infographic):**
- "id": a short unique identifier
- "type": one of "statistical", "process", "comparison", "educational"
- "title": a punchy headline (max 8 words)
- "subtitle": one line of context
- "summary": 2-3 sentences explaining the key takeaway
- "accent_color": a hex colour like "#0EA5E9" that suits the mood; use a different colour for each infographic

**Type-specific payload — fill ONLY the field for the infographic's own type, leave the others out:**
- statistical → "stats": 4-6 items of {{"label", "value" (number), "unit" (optional, e.g. "%")}}
- process → "steps": 4-6 ordered items of {{"title", "description"}}
- comparison → "comparison": {{"side_a": {{"title", "points"}}, "side_b": {{"title", "points"}}}} with 3-5 points per side
- educational → "points": 4 items of {{"title", "text"}}

Return a JSON object of the form {{"infographics": [ ... ]}}.
"""
