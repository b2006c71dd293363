import logging
from typing import Optional

import streamlit as st

from resus_gps.application.ports import ResultsRendererPort
from resus_gps.application.schemas import ReasoningResult
from resus_gps.application.session import ResultsSession, ResultsStage
from resus_gps.application.use_cases import ClinicalReasoningUseCase
from resus_gps.domain.models import FluidRecommendation, SurveySnapshot
from resus_gps.domain.stratifier import StratifiedInterventions, TieredIntervention
from resus_gps.infrastructure.config import Settings
from resus_gps.infrastructure.scenarios import SCENARIOS, scenario_names
from resus_gps.infrastructure.snapshots import SnapshotError, load_snapshot, snapshot_to_json


logger = logging.getLogger(__name__)


DISCLAIMER = (
    "⚕️ **DISCLAIMER:** Decision support only. Scores are heuristic evidence weights, "
    "not calibrated probabilities. Clinical judgement overrides every suggestion here."
)

FLUID_BADGES = {
    FluidRecommendation.BOLUS: "💧 Fluid bolus",
    FluidRecommendation.CAUTIOUS: "⚠️ Cautious fluids (10 mL/kg, reassess)",
    FluidRecommendation.AVOID: "⛔ NO fluid boluses",
}


class StreamlitProtocolLauncher:
    """Records the launched route in session state for the protocol page to pick up."""

    def launch(self, route: str, condition_id: str) -> None:
        st.session_state.launched_route = route
        st.session_state.launched_condition = condition_id


def _init_session_state():
    if "results_session" not in st.session_state:
        st.session_state.results_session = None
    if "snapshot_key" not in st.session_state:
        st.session_state.snapshot_key = None
    if "launched_route" not in st.session_state:
        st.session_state.launched_route = None


def load_uploaded_snapshot(uploaded) -> Optional[SurveySnapshot]:
    if uploaded is None:
        return None
    try:
        return load_snapshot(uploaded.getvalue())
    except SnapshotError as e:
        logger.warning("Rejected uploaded snapshot: %s", e)
        st.error(f"❌ Could not load snapshot: {e}")
        return None


def _render_sidebar() -> Optional[SurveySnapshot]:
    st.sidebar.title("🩺 Primary Survey")
    source = st.sidebar.radio("Snapshot source", ["Sample scenario", "Upload JSON"])
    if source == "Upload JSON":
        uploaded = st.sidebar.file_uploader("Survey snapshot", type=["json"])
        return load_uploaded_snapshot(uploaded)
    name = st.sidebar.selectbox("Scenario", scenario_names())
    return SCENARIOS[name]


def session_for(snapshot: SurveySnapshot, settings: Settings) -> ResultsSession:
    """Reuse the current results session until the snapshot changes."""
    key = snapshot_to_json(snapshot, indent=0)
    if st.session_state.results_session is None or st.session_state.snapshot_key != key:
        usecase = ClinicalReasoningUseCase(default_route=settings.default_protocol_route)
        result = usecase.reason(snapshot)
        st.session_state.results_session = ResultsSession(result, launcher=StreamlitProtocolLauncher())
        st.session_state.snapshot_key = key
        st.session_state.launched_route = None
    return st.session_state.results_session


def _render_differentials(result: ReasoningResult, settings: Settings):
    st.subheader("Differential diagnosis")
    shown = result.above_threshold(settings.display_threshold, settings.max_differentials)
    if not shown:
        st.info("No differential scored above the display threshold.")
        return
    for d in shown:
        with st.expander(f"{d.diagnosis} ({d.probability:.0%}) [{d.category.value}]", expanded=d is shown[0]):
            st.progress(d.probability)
            for item in d.evidence:
                st.markdown(f"- {item}")
            if d.missing:
                st.caption("Not assessed: " + ", ".join(d.missing))
            for q in d.next_questions:
                st.markdown(f"❓ {q}")


def _render_shock(result: ReasoningResult):
    if not result.shock_analyses:
        return
    st.subheader("Shock differentiation")
    for a in result.shock_analyses:
        st.markdown(f"**{a.type.value}** {a.probability:.0%} {FLUID_BADGES[a.fluid_recommendation]}")
        for action in a.immediate_actions:
            st.markdown(f"- {action}")


def _intervention_row(session: ResultsSession, tiered: TieredIntervention):
    item = tiered.intervention
    label = item.name
    if item.dosing and item.dosing.route:
        label += f" ({item.dosing.route})"
    checked = st.checkbox(
        label, value=tiered.completed, key=f"iv_{item.id}", disabled=not tiered.actionable
    )
    if checked != tiered.completed:
        session.toggle_intervention(item.id)
        st.rerun()


def _render_interventions(session: ResultsSession, view: StratifiedInterventions):
    for title, rows in (
        ("🔴 Immediate (start now)", view.immediate),
        ("🟠 Urgent", view.urgent),
        ("🔵 Confirmatory (test before treat)", view.confirmatory),
    ):
        if not rows:
            continue
        st.markdown(f"#### {title}")
        for row in rows:
            _intervention_row(session, row)

    if view.confirmatory and not view.all_stat_tests_sent:
        st.warning("Send stat tests to unlock: " + ", ".join(view.pending_stat_tests))

    if session.plan.required_tests or view.stat_tests:
        st.markdown("#### 🧪 Required tests")
        names = []
        for test in view.stat_tests + session.plan.required_tests:
            if test.name in names:
                continue
            names.append(test.name)
            sent = test.name in session.completed_tests
            label = f"[{test.priority.value}] {test.name}"
            if test.threshold:
                label += f" ({test.threshold})"
            if st.checkbox(label, value=sent, key=f"test_{test.name}") != sent:
                session.toggle_test(test.name)
                st.rerun()


def _render_launch(session: ResultsSession):
    stage = session.stage
    if stage == ResultsStage.LAUNCHED:
        st.success(f"✓ Protocol launched: {st.session_state.launched_route}")
        return
    enabled = stage == ResultsStage.PROTOCOL_LAUNCH_ENABLED
    st.caption(
        "All immediate interventions completed. Launch full protocol for detailed management."
        if enabled
        else "Complete immediate interventions first, then launch protocol."
    )
    if st.button("🚀 Launch protocol", disabled=not enabled, use_container_width=True):
        session.launch_protocol()
        st.rerun()


class StreamlitResultsRenderer:
    def __init__(self, session: ResultsSession, settings: Settings):
        self.session = session
        self.settings = settings

    def render(self, result: ReasoningResult, interventions: StratifiedInterventions) -> None:
        left, right = st.columns(2)
        with left:
            _render_differentials(result, self.settings)
            _render_shock(result)
        with right:
            _render_interventions(self.session, interventions)
            _render_launch(self.session)


def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    st.set_page_config(
        page_title="ResusGPS Clinical Reasoning",
        page_icon="🩺",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    _init_session_state()

    st.markdown("# 🩺 ResusGPS Clinical Reasoning")
    st.info(DISCLAIMER)

    snapshot = _render_sidebar()
    if snapshot is None:
        st.stop()

    session = session_for(snapshot, settings)
    result = session.result
    top = result.top_differential
    if top is not None:
        st.markdown(f"### Working diagnosis: {top.diagnosis}")
        st.caption(f"Age group: {result.age_group.value} · Protocol: {result.protocol_route}")

    renderer: ResultsRendererPort = StreamlitResultsRenderer(session, settings)
    renderer.render(result, session.stratified())


if __name__ == "__main__":
    main()
