"""
Streamlit Frontend for the Savings Tracker

The page has two modes:
1. Setup - what are you tracking, since when, how much per day
2. Tracking - live elapsed time, net savings, treats

DESIGN PRINCIPLES:
1. The page never computes money itself; it only formats SessionState
2. Every rejected input is explained in plain language
3. Reset always asks first

Streamlit owns the refresh cadence: a fragment re-runs every tick interval
and fires the session's pending scheduled tick.
"""

import html
from datetime import date, datetime

import streamlit as st

from savings_tracker.config import get_settings
from savings_tracker.errors import (
    InputValidationError,
    InsufficientSavingsError,
    TrackerNotActiveError,
)
from savings_tracker.models.tracker import SessionState, TrackerStatus
from savings_tracker.presentation import (
    FUTURE_START_MESSAGE,
    format_currency,
    format_start_instant,
    format_time_units,
    insufficient_savings_message,
    treat_rows,
)
from savings_tracker.services import JsonFileKeyValueStore, ManualScheduler
from savings_tracker.session import TrackerSession


# Page configuration
st.set_page_config(
    page_title="Savings Tracker",
    page_icon="💰",
    layout="centered",
)

# Custom CSS for the time cards and treat list
st.markdown("""
<style>
    .time-unit {
        text-align: center;
        padding: 10px;
        background-color: #f1f5f9;
        border-radius: 10px;
    }
    .time-unit div {
        font-size: 2.2em;
        font-weight: bold;
        color: #2c3e50;
    }
    .date-message {
        padding: 20px;
        background-color: #fff3cd;
        border-radius: 10px;
        border-left: 5px solid #ffc107;
        font-weight: bold;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #28a745;
    }
    .treat-item {
        display: flex;
        justify-content: space-between;
        padding: 6px 0;
        border-bottom: 1px solid #e9ecef;
    }
    .treat-item-amount {
        color: #dc3545;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_session() -> tuple[TrackerSession, ManualScheduler]:
    """Get or create the tracker session (cached for the server process)."""
    settings = get_settings()
    scheduler = ManualScheduler()
    session = TrackerSession(
        store=JsonFileKeyValueStore(settings.store_path),
        scheduler=scheduler,
        tick_interval=settings.tick_interval_seconds,
    )
    session.open()
    return session, scheduler


def main():
    """Main application entry point."""
    session, scheduler = get_session()

    if "show_treat_form" not in st.session_state:
        st.session_state.show_treat_form = False

    st.title("💰 Savings Tracker")

    if session.status == TrackerStatus.UNCONFIGURED:
        render_setup_page(session)
    else:
        render_tracker_page(session, scheduler)


def render_setup_page(session: TrackerSession):
    """Render the setup form."""
    st.markdown("Track how much you save by giving something up.")

    defaults = session.defaults
    if defaults is None:
        session.open()
        defaults = session.defaults

    with st.form("setup_form"):
        label = st.text_input(
            "What are you tracking? *",
            value=defaults.label or "",
            placeholder="e.g. No takeaway coffee",
        )

        col1, col2 = st.columns(2)
        with col1:
            start_date = st.date_input(
                "Start date *",
                value=date.fromisoformat(defaults.start_date),
            )
        with col2:
            start_time = st.time_input(
                "Start time *",
                value=datetime.strptime(defaults.start_time, "%H:%M").time(),
                step=60,
            )

        daily_rate = st.text_input(
            "Saving per day *",
            placeholder="e.g. 4.50",
            help="How much you save each day",
        )

        submitted = st.form_submit_button("▶️ Start Tracking", type="primary")

    if submitted:
        try:
            session.start(
                label=label,
                start_date=start_date,
                start_time=start_time,
                daily_rate=daily_rate,
            )
        except InputValidationError as e:
            st.error(e.message)
        else:
            st.rerun()


def render_tracker_page(session: TrackerSession, scheduler: ManualScheduler):
    """Render the live tracker."""
    config = session.config

    st.subheader(config.label)
    st.caption(f"Since {format_start_instant(config.start_instant)}")

    render_live_numbers(session, scheduler)

    st.markdown("---")
    render_treat_section(session)

    st.markdown("---")
    render_reset_section(session)


@st.fragment(run_every=get_settings().tick_interval_seconds)
def render_live_numbers(session: TrackerSession, scheduler: ManualScheduler):
    """Time cards and savings, refreshed every tick."""
    scheduler.run_pending()
    state = session.state or session.tick()
    if state is None:
        return

    if state.is_future:
        st.markdown(
            f'<div class="date-message">{FUTURE_START_MESSAGE}</div>',
            unsafe_allow_html=True,
        )
    else:
        render_time_units(state)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("**Money saved**")
        st.markdown(
            f'<div class="big-number">{format_currency(state.net_saved)}</div>',
            unsafe_allow_html=True,
        )
    with col2:
        st.markdown("**Spent on treats**")
        st.markdown(f"### {format_currency(state.total_treats)}")


def render_time_units(state: SessionState):
    """Render days/hours/minutes/seconds cards."""
    columns = st.columns(4)
    for column, (value, label) in zip(columns, format_time_units(state.breakdown)):
        with column:
            st.markdown(f"""
            <div class="time-unit">
                <div>{value}</div>
                <span>{label}</span>
            </div>
            """, unsafe_allow_html=True)


def render_treat_section(session: TrackerSession):
    """Treat form toggle, form and list."""
    if st.button("🍩 Log a Treat"):
        st.session_state.show_treat_form = not st.session_state.show_treat_form

    if st.session_state.show_treat_form:
        with st.form("treat_form", clear_on_submit=True):
            treat_label = st.text_input("What was it? *")
            treat_amount = st.text_input("How much? *", placeholder="e.g. 3.20")
            submitted = st.form_submit_button("Save Treat", type="primary")

        if submitted:
            try:
                session.log_treat(treat_label, treat_amount)
            except InputValidationError as e:
                st.error(e.message)
            except InsufficientSavingsError as e:
                st.error(insufficient_savings_message(e))
            except TrackerNotActiveError as e:
                st.error(str(e))
            else:
                st.session_state.show_treat_form = False
                st.rerun()

    state = session.state
    if state is None or not state.treats:
        return

    st.markdown("#### Treats")
    rows_html = "".join(
        f"""
        <div class="treat-item">
            <span class="treat-item-label">{html.escape(row.label)} ({row.when})</span>
            <span class="treat-item-amount">{row.amount}</span>
        </div>
        """
        for row in treat_rows(state.treats)
    )
    st.markdown(rows_html, unsafe_allow_html=True)


def render_reset_section(session: TrackerSession):
    """Reset button, guarded by an explicit confirmation."""
    confirmed = st.checkbox(
        "I understand that resetting deletes all tracker data.",
    )
    if st.button("🗑️ Reset Tracker", disabled=not confirmed):
        if session.reset(confirm=lambda: confirmed):
            st.session_state.show_treat_form = False
            st.rerun()


if __name__ == "__main__":
    main()
