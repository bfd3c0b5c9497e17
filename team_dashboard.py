"""Team formation dashboard, Streamlit entry point.

Run with ``streamlit run team_dashboard.py``.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import logging
from pathlib import Path
import tempfile

from lib_teambuilder.config import load_settings
from lib_teambuilder.errors import ConfigurationError, ParallelTaskFailure
from lib_teambuilder.ingestion import read_participants_parallel
from lib_teambuilder.participant_models import TeamFormationResult
from lib_teambuilder.registry import TeamRegistry
from lib_teambuilder.report import summarize, team_rows
import plotly.graph_objects as go  # type: ignore[import-untyped]
import streamlit as st


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="Team Formation", page_icon="🧩", layout="wide")
st.title("🧩 Team Formation")


# ---------------------------------------------------------------------------
# Session-state helpers
# ---------------------------------------------------------------------------
@st.cache_resource
def _executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=4)


def _get_registry() -> TeamRegistry:
    if "registry" not in st.session_state:
        st.session_state.registry = TeamRegistry(load_settings(), executor=_executor())
    registry: TeamRegistry = st.session_state.registry
    return registry


def _render_result(result: TeamFormationResult) -> None:
    summary = summarize(result)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Compliant teams", summary.compliant_teams)
    c2.metric("Overflow teams", summary.overflow_teams)
    c3.metric("Players", summary.total_players)
    c4.metric("Skill gap", f"{summary.skill_gap:.2f}")

    fig = go.Figure(go.Bar(
        x=[f"Team {t.team_id}" for t in result.all_teams],
        y=[round(t.average_skill, 2) for t in result.all_teams],
        marker_color=["#27AE60"] * len(result.compliant_teams)
        + ["#E67E22"] * len(result.overflow_teams),
    ))
    fig.update_layout(yaxis_title="Average skill", height=320)
    st.plotly_chart(fig, use_container_width=True)

    st.subheader("Compliant teams")
    for team in result.compliant_teams:
        with st.expander(f"Team {team.team_id} — avg skill {team.average_skill:.2f}"):
            st.dataframe(team_rows(team), use_container_width=True)

    if result.overflow_teams:
        st.subheader("Overflow teams (rules not enforced)")
        violations = result.violations()
        for team in result.overflow_teams:
            with st.expander(f"Team {team.team_id} — {team.size}/{result.target_size} members"):
                for rule in violations[team.team_id]:
                    st.warning(rule)
                st.dataframe(team_rows(team), use_container_width=True)


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
registry = _get_registry()

with st.sidebar:
    uploaded = st.file_uploader("Participants CSV", type=["csv"])
    team_size = st.slider("Team size", min_value=2, max_value=10, value=registry.settings.team_size)

    if uploaded is not None and st.button("Load participants"):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "participants.csv"
            path.write_bytes(uploaded.getvalue())
            try:
                report = read_participants_parallel(
                    path, _executor(), workers=registry.settings.ingest_workers,
                )
                registry.load(report.participants)
                st.success(f"Loaded {len(report.participants)} participants")
            except (ParallelTaskFailure, ValueError) as e:
                logger.error("Failed to load participants: %s", e)
                st.error(str(e))

    if st.button("Form teams", type="primary"):
        try:
            registry.form(team_size)
        except ConfigurationError as e:
            st.error(str(e))

    withdraw_id = st.text_input("Withdraw participant ID")
    if withdraw_id and st.button("Withdraw"):
        try:
            registry.withdraw(withdraw_id)
            st.success(f"Participant {withdraw_id} withdrawn")
        except ValueError as e:
            st.error(str(e))

current = registry.snapshot()
if current is None:
    st.info("Load participants and form teams to see results.")
else:
    _render_result(current)
