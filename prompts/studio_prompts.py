"""
prompts/studio_prompts.py — Prompt templates for the image studio.
"""

# ── Image Edit ──────────────────────────────────────────────
IMAGE_EDIT_PROMPT = """Edit the attached image according to this instruction:

{instruction}

Keep everything the instruction does not mention as close to the original as possible. Return the edited image."""
