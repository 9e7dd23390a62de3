"""
Streamlit building blocks shared by the Career Hub and Skill Quiz apps.

Render functions only draw what they are given; the few pure helpers
(`embed_url`, `roadmap_svg`, `theme_css`) are kept separate so they can be
tested without a running Streamlit server.
"""
import html
from typing import Iterable, List, Optional

import streamlit as st
import streamlit.components.v1 as st_components

from app_context import AppContext, LIGHT
from models import LearningPlan, Question

SEARCH_PLACEHOLDER = "Search a career, skill, or course (e.g., Frontend Developer)"

_LIGHT_CSS = """
<style>
.stApp { background: #f6f7fb; color: #111827; }
</style>
"""
_DARK_CSS = """
<style>
.stApp { background: #0b1020; color: #e5e7eb; }
</style>
"""


# --- Pure helpers ---
def embed_url(url: str) -> str:
    """Turn a YouTube watch link into its embeddable form."""
    return url.replace("watch?v=", "embed/")


def roadmap_svg(plan: LearningPlan) -> str:
    """Render the plan's steps as a left-to-right SVG roadmap."""
    steps = plan.learningPath or []
    width = len(steps) * 180 + 40
    points = " ".join(f"{40 + i * 160},80" for i in range(len(steps)))
    nodes = []
    for i, step in enumerate(steps):
        x = 40 + i * 160
        nodes.append(
            f'<g><circle cx="{x}" cy="80" r="18" fill="#00d4ff" />'
            f'<text x="{x}" y="120" text-anchor="middle" font-size="12" '
            f'fill="currentColor">{html.escape(step.title)}</text></g>'
        )
    return (
        f'<svg viewBox="0 0 {width} 160" style="width:100%;height:180px">'
        f'<polyline fill="none" stroke="#7c5cff" stroke-width="6" '
        f'stroke-linecap="round" points="{points}" />'
        + "".join(nodes)
        + "</svg>"
    )


def theme_css(theme: str) -> str:
    return _LIGHT_CSS if theme == LIGHT else _DARK_CSS


# --- Render functions ---
def theme_toggle(context: AppContext, key: str = "theme_toggle") -> None:
    label = "🌞 Light" if context.theme == LIGHT else "🌙 Dark"
    if st.button(label, key=key):
        context.toggle_theme()
        st.rerun()
    st.markdown(theme_css(context.theme), unsafe_allow_html=True)


def card(title: Optional[str] = None, body: Optional[str] = None):
    """Open a bordered container, optionally with a title and markdown body."""
    box = st.container(border=True)
    if title:
        box.markdown(f"### {title}")
    if body:
        box.markdown(body)
    return box


def search_bar(key: str, compact: bool = False) -> Optional[str]:
    """Return the query when the Search button is pressed, else None."""
    col1, col2 = st.columns([3, 1] if compact else [5, 1])
    with col1:
        query = st.text_input("Search", placeholder=SEARCH_PLACEHOLDER,
                              key=f"{key}_query", label_visibility="collapsed")
    with col2:
        if st.button("Search", key=f"{key}_button"):
            return query
    return None


def header(context: AppContext) -> Optional[str]:
    col1, col2, col3 = st.columns([2, 4, 1])
    with col1:
        st.markdown("**Student Career Hub**")
    with col2:
        query = search_bar("header", compact=True)
    with col3:
        theme_toggle(context, key="header_theme")
    return query


def home(quick_topics: Iterable[str]) -> Optional[str]:
    """Hero search plus quick-topic cards; returns whichever query was chosen."""
    st.title("Find your path in tech")
    st.caption("Personalized learning plans, AI chat, interactive roadmaps, and more.")
    query = search_bar("hero")

    topics: List[str] = list(quick_topics)
    for col, topic in zip(st.columns(len(topics)), topics):
        with col:
            box = card(topic, f"Click to explore a curated roadmap for {topic}.")
            if box.button("Open roadmap", key=f"topic_{topic}"):
                query = topic
    return query


def skeleton() -> None:
    with st.spinner("Generating your learning plan..."):
        for _ in range(3):
            st.container(border=True).markdown("&nbsp;")


def plan_summary(plan: LearningPlan) -> None:
    box = card(plan.title, plan.description)
    if plan.keySkills:
        box.markdown(" ".join(f"`{skill}`" for skill in plan.keySkills))


def roadmap(plan: LearningPlan) -> None:
    box = card("Interactive Roadmap")
    box.markdown(roadmap_svg(plan), unsafe_allow_html=True)


def step_details(plan: LearningPlan) -> None:
    for idx, step in enumerate(plan.learningPath, start=1):
        box = card(f"Step {idx}: {step.title}", step.description)
        for skill in step.skillsToLearn:
            box.markdown(f"- {skill}")
        for video in step.videos:
            with box:
                st_components.iframe(embed_url(video.url), height=220)


def radio(question: Question, selected: Optional[int], key: str,
          disabled: bool = False) -> Optional[int]:
    """One option group per question; returns the chosen option index."""
    return st.radio(
        question.question,
        options=list(range(len(question.options))),
        format_func=lambda i: question.options[i],
        index=selected,
        key=key,
        disabled=disabled,
    )


def layout(backend_url: str) -> str:
    """Sidebar navigation for the quiz app; returns the selected page."""
    st.sidebar.title("Career Hub")
    page = st.sidebar.radio("Navigation", ["Home", "Quiz"], key="nav_page")
    st.sidebar.markdown(f"[System Test]({backend_url}/test)")
    st.sidebar.caption("Built with Flames Blue")
    return page
