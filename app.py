"""
app.py — Streamlit interface for Infografix AI & Studio.
Two modes: topic → four infographic layouts, and photo + instruction → edited photo.
"""

from __future__ import annotations

from datetime import date
from typing import Callable, Dict

import streamlit as st
from pydantic import ValidationError

from config import Settings, get_settings
from models import AppMode
from orchestrator import AppOrchestrator
from ui.infographic_card import CachedCharts, render_infographic_card
from utils.data_url import decode_data_url

UPLOAD_TYPES = ["png", "jpg", "jpeg", "webp", "gif"]
EDITED_FILE_NAME = "ai-edit.png"

PLACEHOLDERS = {
    AppMode.INFOGRAPHICS: "Explain the water cycle...",
    AppMode.STUDIO: "Add a retro filter, remove the person, make it night...",
}

HERO_KINDS = [
    ("📊", "Stats"),
    ("🔁", "Flows"),
    ("⚖️", "Versus"),
    ("📘", "Guides"),
]


# ── Page Config ─────────────────────────────────────────────
st.set_page_config(
    page_title="Infografix AI",
    page_icon="🧩",
    layout="wide",
    initial_sidebar_state="collapsed",
)

# ── Custom CSS ──────────────────────────────────────────────
st.markdown(
    """
<style>
    /* ── Global ── */
    .stApp { background: #f8fafc; color: #0f172a; }
    .brand { font-size: 1.4rem; font-weight: 900; color: #0f172a; letter-spacing: -0.5px; margin: 0; }
    .brand span { color: #4f46e5; }

    /* ── Hero ── */
    .hero { text-align: center; padding: 4rem 0 2rem 0; max-width: 42rem; margin: 0 auto; }
    .hero h2 { font-size: 2.4rem; font-weight: 800; color: #0f172a; margin-bottom: 0.75rem; }
    .hero p { color: #64748b; font-size: 1.1rem; margin-bottom: 2rem; }
    .hero-grid { display: grid; grid-template-columns: repeat(4, 1fr); gap: 1rem; }
    .hero-kind {
        background: white; padding: 1rem; border-radius: 1rem;
        border: 1px solid #f1f5f9; box-shadow: 0 1px 2px rgba(0,0,0,0.04);
        display: flex; flex-direction: column; align-items: center; gap: 0.4rem;
    }
    .hero-kind .label {
        font-size: 0.65rem; font-weight: 700; color: #94a3b8;
        text-transform: uppercase; letter-spacing: 0.15em;
    }

    /* ── Skeletons ── */
    @keyframes pulse { 50% { opacity: 0.5; } }
    .skeleton {
        background: white; border-radius: 2rem; padding: 2.5rem;
        border: 1px solid #f1f5f9; margin-bottom: 3rem; animation: pulse 2s infinite;
    }
    .skeleton .bar { height: 2.5rem; width: 66%; background: #f1f5f9; border-radius: 0.5rem; margin-bottom: 2.5rem; }
    .skeleton .block { height: 16rem; width: 100%; background: #f8fafc; border-radius: 1rem; }

    /* ── Infographic Cards ── */
    .ig-card {
        position: relative; overflow: hidden; background: rgba(248,250,252,0.5);
        border-radius: 2.5rem; padding: 2.5rem; border: 1px solid #e2e8f0;
        box-shadow: 0 20px 25px -5px rgba(0,0,0,0.08); margin-bottom: 4rem;
    }
    .ig-glow {
        position: absolute; top: -5rem; right: -5rem; width: 16rem; height: 16rem;
        border-radius: 50%; opacity: 0.05;
    }
    .ig-pill {
        display: inline-block; padding: 0.25rem 0.75rem; border-radius: 999px;
        font-size: 0.65rem; font-weight: 700; text-transform: uppercase;
        letter-spacing: 0.2em; color: white; margin-bottom: 1rem;
    }
    .ig-card h2 { font-size: 2.2rem; font-weight: 800; color: #0f172a; line-height: 1.15; margin: 0 0 0.5rem 0; }
    .ig-subtitle { color: #64748b; font-weight: 500; font-size: 1.1rem; margin-bottom: 2rem; }
    .ig-summary {
        color: #334155; font-size: 0.9rem; line-height: 1.6; background: rgba(255,255,255,0.6);
        padding: 1rem; border-radius: 0.75rem; border: 1px solid white; margin-bottom: 1.5rem;
    }
    .ig-card h4 { font-weight: 700; color: #1e293b; margin: 0 0 0.25rem 0; }
    .ig-card p { margin: 0; }
    .ig-muted { color: #94a3b8; }

    .ig-chart { width: 100%; border-radius: 1rem; margin-bottom: 1.5rem; }
    .ig-stat-grid { display: grid; grid-template-columns: repeat(2, 1fr); gap: 1rem; }
    .ig-stat {
        background: rgba(255,255,255,0.5); padding: 1rem; border-radius: 0.75rem;
        border: 1px solid #f1f5f9; display: flex; align-items: center; gap: 0.75rem;
    }
    .ig-stat-icon {
        width: 2.5rem; height: 2.5rem; border-radius: 0.5rem; color: white; flex-shrink: 0;
        display: flex; align-items: center; justify-content: center; font-size: 1.2rem;
    }
    .ig-stat-label { font-size: 0.7rem; color: #64748b; font-weight: 500; text-transform: uppercase; letter-spacing: 0.05em; }
    .ig-stat-value { font-size: 1.15rem; font-weight: 700; color: #1e293b; }

    .ig-process { position: relative; margin-top: 2rem; }
    .ig-timeline { position: absolute; left: 27px; top: 1rem; bottom: 1rem; width: 2px; background: #e2e8f0; }
    .ig-step { position: relative; display: flex; gap: 1.5rem; align-items: flex-start; margin-bottom: 2rem; }
    .ig-step-num {
        z-index: 1; width: 3.5rem; height: 3.5rem; border-radius: 50%; border: 4px solid white;
        box-shadow: 0 4px 6px rgba(0,0,0,0.1); color: white; font-weight: 700; font-size: 1.25rem;
        display: flex; align-items: center; justify-content: center; flex-shrink: 0;
    }
    .ig-step-body {
        background: white; padding: 1.25rem; border-radius: 1rem; flex: 1;
        border: 1px solid #f1f5f9; box-shadow: 0 1px 2px rgba(0,0,0,0.04);
    }
    .ig-step-body p { color: #475569; font-size: 0.9rem; line-height: 1.6; }

    .ig-comparison { display: flex; gap: 1rem; margin-top: 1.5rem; flex-wrap: wrap; }
    .ig-side { flex: 1; min-width: 16rem; padding: 1.5rem; border-radius: 1rem; border-top: 4px solid #94a3b8; }
    .ig-side-a { background: white; }
    .ig-side-b { background: #f8fafc; }
    .ig-side h4 { text-align: center; font-size: 1.25rem; margin-bottom: 1rem; }
    .ig-side-a h4 { text-decoration: underline; text-decoration-thickness: 2px; text-underline-offset: 4px; }
    .ig-side ul { list-style: none; padding: 0; margin: 0; }
    .ig-side li { display: flex; gap: 0.75rem; font-size: 0.9rem; color: #475569; margin-bottom: 1rem; }
    .ig-vs { display: flex; align-items: center; justify-content: center; padding: 1rem; }
    .ig-vs span {
        background: #1e293b; color: white; width: 2.5rem; height: 2.5rem; border-radius: 50%;
        display: flex; align-items: center; justify-content: center; font-weight: 700; font-size: 0.75rem;
    }

    .ig-educational { display: grid; grid-template-columns: repeat(2, 1fr); gap: 1.5rem; margin-top: 2rem; }
    .ig-point {
        background: white; border-radius: 1rem; padding: 1.5rem;
        border: 1px solid #f1f5f9; box-shadow: 0 1px 2px rgba(0,0,0,0.04);
    }
    .ig-point-icon {
        width: 3rem; height: 3rem; border-radius: 0.75rem; margin-bottom: 1rem;
        display: flex; align-items: center; justify-content: center; font-size: 1.4rem;
    }
    .ig-point p { color: #475569; font-size: 0.9rem; line-height: 1.6; }

    /* ── Studio ── */
    .panel-label {
        font-size: 0.65rem; font-weight: 700; color: #94a3b8;
        text-transform: uppercase; letter-spacing: 0.15em;
    }
    .panel-label.accent { color: #6366f1; }
    .result-placeholder { text-align: center; padding: 4rem 2rem; color: #cbd5e1; }
    .result-placeholder .icon { font-size: 3rem; opacity: 0.3; }
    .result-placeholder.working { color: #94a3b8; }
    @keyframes spin { to { transform: rotate(360deg); } }
    .spinner {
        width: 3rem; height: 3rem; margin: 0 auto 1rem auto; border-radius: 50%;
        border: 4px solid #e0e7ff; border-top-color: #4f46e5; animation: spin 1s linear infinite;
    }
    .working p { animation: pulse 2s infinite; font-weight: 500; }
    .tips {
        background: #4f46e5; color: white; padding: 2rem; border-radius: 2rem;
        box-shadow: 0 20px 25px -5px rgba(199,210,254,0.8); margin-top: 2rem;
    }
    .tips h4 { color: white; font-weight: 700; margin: 0 0 0.5rem 0; }
    .tips p { opacity: 0.8; font-size: 0.9rem; margin: 0; }

    /* ── Footer ── */
    .footer {
        border-top: 1px solid #e2e8f0; margin-top: 4rem; padding: 2.5rem 0;
        color: #94a3b8; font-size: 0.85rem; font-weight: 500;
    }
</style>
""",
    unsafe_allow_html=True,
)


# ── Session State Initialization ────────────────────────────
def get_orchestrator(settings: Settings) -> AppOrchestrator:
    """Get or create the per-session orchestrator."""
    if "orchestrator" not in st.session_state:
        st.session_state.orchestrator = AppOrchestrator(
            st.session_state, settings=settings
        )
    orchestrator = st.session_state.orchestrator
    orchestrator.init_state()
    return orchestrator


def render_setup_notice(error: ValidationError) -> None:
    """Shown instead of the app when settings cannot be loaded."""
    st.markdown('<p class="brand">Infografix<span>AI</span></p>', unsafe_allow_html=True)
    st.error("**Configuration required:** the Gemini API key is not set.")
    st.markdown(
        "Set `GEMINI_API_KEY` in the environment or in a `.env` file next to "
        "`app.py`, then reload the page."
    )
    with st.expander("Details"):
        st.code(str(error))


# ── Header ──────────────────────────────────────────────────
def render_header(orchestrator: AppOrchestrator) -> None:
    """Brand, mode switch and the shared prompt form."""
    mode = orchestrator.mode
    col_brand, col_modes, col_form = st.columns([2, 3, 6], vertical_alignment="center")

    with col_brand:
        st.markdown('<p class="brand">Infografix<span>AI</span></p>', unsafe_allow_html=True)

    with col_modes:
        col_a, col_b = st.columns(2)
        with col_a:
            st.button(
                "📊 Infographics",
                type="primary" if mode is AppMode.INFOGRAPHICS else "secondary",
                use_container_width=True,
                on_click=orchestrator.set_mode,
                args=(AppMode.INFOGRAPHICS,),
            )
        with col_b:
            st.button(
                "🪄 Image Studio",
                type="primary" if mode is AppMode.STUDIO else "secondary",
                use_container_width=True,
                on_click=orchestrator.set_mode,
                args=(AppMode.STUDIO,),
            )

    with col_form:
        with st.form("prompt_form", border=False):
            col_input, col_send = st.columns([6, 1], vertical_alignment="bottom")
            with col_input:
                prompt = st.text_input(
                    "Prompt",
                    placeholder=PLACEHOLDERS[mode],
                    label_visibility="collapsed",
                    disabled=st.session_state.is_loading,
                )
            with col_send:
                submitted = st.form_submit_button(
                    "⏳" if st.session_state.is_loading else "➤",
                    type="primary",
                    use_container_width=True,
                    disabled=orchestrator.submit_disabled(),
                )
        if submitted and orchestrator.submit(prompt):
            st.rerun()

    st.divider()


# ── Infographics Mode ───────────────────────────────────────
def render_hero() -> None:
    kinds = "".join(
        f'<div class="hero-kind"><span>{icon}</span><span class="label">{label}</span></div>'
        for icon, label in HERO_KINDS
    )
    st.markdown(
        '<div class="hero">'
        "<h2>✨ Visualize Any Data</h2>"
        "<p>Generate 4 unique infographic styles from a simple topic description.</p>"
        f'<div class="hero-grid">{kinds}</div>'
        "</div>",
        unsafe_allow_html=True,
    )


def render_skeletons(count: int = 4) -> None:
    st.markdown(
        '<div class="skeleton"><div class="bar"></div><div class="block"></div></div>' * count,
        unsafe_allow_html=True,
    )


def render_infographics(orchestrator: AppOrchestrator) -> None:
    state = st.session_state
    results = orchestrator.results

    if not results and not state.is_loading and not state.error_message:
        render_hero()
        return

    # Previous results stay below the skeletons until the new set arrives
    if state.is_loading:
        render_skeletons()

    charts = CachedCharts(orchestrator.settings.chart_dpi)
    for info in results:
        render_infographic_card(info, charts)


# ── Studio Mode ─────────────────────────────────────────────
def _on_upload(widget_key: str) -> None:
    uploaded = st.session_state.get(widget_key)
    if uploaded is None:
        return
    st.session_state.orchestrator.handle_upload(
        uploaded.getvalue(), uploaded.type, uploaded.name
    )


def render_upload_zone() -> None:
    widget_key = f"uploader_{st.session_state.uploader_key}"
    st.markdown("### ⬆️ Upload Source Image")
    st.caption(
        "Choose a photo to transform with AI. You can then use prompts to add "
        "filters, objects, or change the scene."
    )
    st.file_uploader(
        "Source image",
        type=UPLOAD_TYPES,
        key=widget_key,
        on_change=_on_upload,
        args=(widget_key,),
        label_visibility="collapsed",
    )


def render_workspace(orchestrator: AppOrchestrator) -> None:
    state = st.session_state

    col_title, col_reset = st.columns([4, 1], vertical_alignment="center")
    with col_title:
        st.markdown("#### 🖼️ Studio Workspace")
    with col_reset:
        st.button(
            "🗑️ Reset Studio",
            use_container_width=True,
            on_click=orchestrator.clear_studio,
            disabled=state.is_loading,
        )

    col_source, col_result = st.columns(2)
    with col_source:
        with st.container(border=True):
            st.markdown('<span class="panel-label">Original Image</span>', unsafe_allow_html=True)
            _, source_bytes = decode_data_url(state.source_image)
            st.image(source_bytes, use_container_width=True)

    with col_result:
        with st.container(border=True):
            st.markdown(
                '<span class="panel-label accent">AI Edited Result</span>',
                unsafe_allow_html=True,
            )
            if state.is_loading:
                st.markdown(
                    '<div class="result-placeholder working"><div class="spinner"></div>'
                    "<p>Applying AI Magic...</p></div>",
                    unsafe_allow_html=True,
                )
            elif state.edited_image:
                edited_mime, edited_bytes = decode_data_url(state.edited_image)
                st.image(edited_bytes, use_container_width=True)
                st.download_button(
                    "⬇️ Download",
                    data=edited_bytes,
                    file_name=EDITED_FILE_NAME,
                    mime=edited_mime,
                    use_container_width=True,
                )
            else:
                st.markdown(
                    '<div class="result-placeholder"><div class="icon">🪄</div>'
                    "<p>Use the prompt above to edit this image</p></div>",
                    unsafe_allow_html=True,
                )

    st.markdown(
        '<div class="tips"><h4>✨ Ready to transform?</h4>'
        "<p>Type instructions in the top search bar. Try commands like "
        '"Add snow to the mountains", "Give this person a superhero costume", '
        'or "Apply a neon futuristic aesthetic".</p></div>',
        unsafe_allow_html=True,
    )


def render_studio(orchestrator: AppOrchestrator) -> None:
    if not st.session_state.source_image:
        render_upload_zone()
    else:
        render_workspace(orchestrator)


def render_footer() -> None:
    st.markdown(
        f'<div class="footer">&copy; {date.today().year} Infografix AI &amp; Studio.</div>',
        unsafe_allow_html=True,
    )


# ── Main App ────────────────────────────────────────────────
def main() -> None:
    """Main application entry point."""
    try:
        settings = get_settings()
    except ValidationError as e:
        render_setup_notice(e)
        return

    orchestrator = get_orchestrator(settings)
    render_header(orchestrator)

    if st.session_state.error_message:
        st.error(st.session_state.error_message, icon="ℹ️")

    modes: Dict[AppMode, Callable[[AppOrchestrator], None]] = {
        AppMode.INFOGRAPHICS: render_infographics,
        AppMode.STUDIO: render_studio,
    }
    modes[orchestrator.mode](orchestrator)

    render_footer()

    # Second half of a submission: the loading UI is on screen, run the call
    if st.session_state.is_loading:
        orchestrator.process_pending()
        st.rerun()


if __name__ == "__main__":
    main()
