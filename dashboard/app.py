"""
Streamlit Dashboard for the Rockfall Risk Monitor

Interactive dashboard for mine selection, risk assessment, elevation
models, data sources, probability forecasts and alerting.
"""

import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import logging
import time
from datetime import datetime

from rockfall import config
from rockfall.alerts import CHANNELS, alert_banner, format_elapsed, recommendation
from rockfall.api_client import RockfallAPIClient
from rockfall.dashboard_state import (
    AnalyzeLocation,
    DashboardState,
    DismissAlert,
    ResolveDueAlerts,
    SelectMine,
    SendAlert,
    SetAutoAlerts,
    tab_available,
    transition,
)
from rockfall.exceptions import APIClientError
from rockfall.simulation.elevation import VIEW_MODES
from rockfall.mines import search_mines
from rockfall.simulation import (
    TIME_RANGES,
    data_source_summary,
    default_data_sources,
    elevation_profile,
    forecast_summary,
    make_rng,
    monitoring_trends,
    probability_forecast,
    profile_summary,
    refresh_zones,
    risk_zone_grid,
    tick_data_sources,
    zone_counts,
)

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

RISK_COLORS = {
    "High": "#ef4444",
    "Medium": "#f59e0b",
    "Low": "#eab308",
    "Safe": "#10b981",
}

# Page configuration
st.set_page_config(
    page_title="Rockfall Risk Monitor",
    page_icon="⛰️",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_rng():
    return make_rng()


@st.cache_resource
def get_api_client():
    if not config.API_URL:
        return None
    return RockfallAPIClient()


rng = get_rng()
api_client = get_api_client()

if "dashboard" not in st.session_state:
    st.session_state.dashboard = DashboardState()
    st.session_state.data_sources = default_data_sources()
    st.session_state.risk_zones = None


def dispatch(event):
    st.session_state.dashboard = transition(st.session_state.dashboard, event, rng=rng)


# Title and description
st.title("⛰️ Rockfall Risk Monitor")
st.markdown("**Mining Safety Monitoring**")

# Sidebar
st.sidebar.header("Location Analysis")
location_name = st.sidebar.text_input("Location name", placeholder="e.g. North Pit, Bench 4")
if st.sidebar.button("Analyze Location", type="primary", disabled=not location_name):
    with st.spinner("Analyzing location..."):
        dispatch(AnalyzeLocation(location_name))
        st.session_state.risk_zones = None

# Settle alerts whose simulated delivery delay has elapsed
dispatch(ResolveDueAlerts(datetime.now()))
state = st.session_state.dashboard

# Alert banner
if state.show_alert and state.assessment is not None:
    banner = alert_banner(state.assessment.level)
    with st.container(border=True):
        st.error(f"🚨 **{banner['title']}**")
        st.write(banner["message"])
        st.caption(f"Location: {state.location.name}")
        for action in banner["actions"]:
            st.markdown(f"- {action}")
        if st.button("Acknowledge"):
            dispatch(DismissAlert())
            st.rerun()

tab_overview, tab_search, tab_elevation, tab_data, tab_forecast, tab_alerts = st.tabs(
    ["🛡️ Overview", "📍 Mine Search", "⛰️ Elevation", "🗄️ Data Sources", "🧠 AI Forecast", "🔔 Alerts"]
)

with tab_search:
    st.subheader("Mine Search & Selection")
    term = st.text_input("Search mines by name, location, or type...")
    mines = search_mines(term)

    if not mines:
        st.info("No mines found matching your search")

    for mine in mines:
        with st.container(border=True):
            col1, col2, col3 = st.columns([3, 2, 1])
            col1.markdown(f"**{mine.name}**  \n📍 {mine.location}")
            col1.caption(f"{mine.type} • {mine.status}")
            col2.markdown(f"Elevation: {mine.elevation}m  \nArea: {mine.area} ha")
            selected = state.selected_mine is not None and state.selected_mine.id == mine.id
            if col3.button("Selected" if selected else "Select", key=f"select-{mine.id}", disabled=selected):
                dispatch(SelectMine(mine))
                st.session_state.risk_zones = None
                st.rerun()

with tab_overview:
    if state.location is None or state.assessment is None:
        st.info("👈 Choose a mining site from the **Mine Search** tab, or analyze a location from the sidebar.")
    else:
        location = state.location
        assessment = state.assessment

        if state.selected_mine is not None:
            mine = state.selected_mine
            st.subheader(mine.name)
            st.caption(f"{mine.location} • {mine.type} • Elevation: {mine.elevation}m • Area: {mine.area} ha")
        else:
            st.subheader(location.name)

        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Slope Stability", f"{assessment.factors.slope_instability}%", help="Critical threshold: 75%")
        col2.metric("Vibration Level", f"{assessment.factors.vibration_patterns}%")
        col3.metric("Weather Impact", f"{assessment.factors.weather_conditions}%",
                    help=f"Rainfall: {location.rainfall:.1f}mm")
        col4.metric("AI Prediction", f"{assessment.probability}%", delta=f"{assessment.level} Risk",
                    delta_color="inverse")

        level = assessment.level
        if level == "High":
            st.error(f"⚠️ **{level} Risk** - {recommendation(level)}")
        elif level == "Medium":
            st.warning(f"⚠️ **{level} Risk** - {recommendation(level)}")
        elif level == "Low":
            st.info(f"ℹ️ **{level} Risk** - {recommendation(level)}")
        else:
            st.success(f"✅ **{level} Risk** - {recommendation(level)}")

        st.markdown("---")

        left, right = st.columns(2)

        with left:
            st.subheader("Risk Assessment")
            st.markdown(
                f"Elevation: **{location.elevation}m** • Slope: **{location.slope:.1f}°** • "
                f"Temperature: **{location.temperature:.1f}°C** • Rainfall: **{location.rainfall:.1f}mm**"
            )
            st.progress(min(assessment.probability, 100) / 100, text=f"Probability of rockfall event: {assessment.probability}%")

            factors = ["Slope Instability", "Vibration Patterns", "Weather Conditions"]
            scores = [
                assessment.factors.slope_instability,
                assessment.factors.vibration_patterns,
                assessment.factors.weather_conditions
            ]
            fig = px.bar(
                x=factors,
                y=scores,
                labels={"x": "Factor", "y": "Score (0-100)"},
                title="Risk Factors Analysis",
                color=scores,
                color_continuous_scale="Reds"
            )
            fig.update_layout(showlegend=False)
            st.plotly_chart(fig, use_container_width=True)

        with right:
            st.subheader("Real-Time Risk Maps")
            if st.session_state.risk_zones is None:
                st.session_state.risk_zones = risk_zone_grid(rng)
            if st.button("Refresh zones"):
                st.session_state.risk_zones = refresh_zones(st.session_state.risk_zones, rng)

            zones = st.session_state.risk_zones
            fig = go.Figure()
            for zone in zones:
                fig.add_shape(
                    type="rect",
                    x0=zone.x, y0=zone.y, x1=zone.x + zone.width, y1=zone.y + zone.height,
                    fillcolor=RISK_COLORS[zone.risk], opacity=0.7, line={"width": 0}
                )
            fig.add_trace(go.Scatter(
                x=[z.x + z.width / 2 for z in zones],
                y=[z.y + z.height / 2 for z in zones],
                text=[f"{z.probability}%" for z in zones],
                hovertext=[f"{z.id}: {z.risk} ({', '.join(z.factors) or 'no factors'})" for z in zones],
                mode="text"
            ))
            fig.update_yaxes(autorange="reversed", visible=False)
            fig.update_xaxes(visible=False)
            fig.update_layout(height=340, margin={"l": 0, "r": 0, "t": 10, "b": 0})
            st.plotly_chart(fig, use_container_width=True)
            st.caption(" • ".join(f"{band}: {count}" for band, count in zone_counts(zones).items()))

        st.subheader("24-Hour Monitoring Trends")
        trends = monitoring_trends(location, rng)
        fig = px.line(
            trends,
            x="hour",
            y=["vibration", "slope", "rainfall"],
            labels={"hour": "Hour", "value": "Reading", "variable": "Sensor"}
        )
        st.plotly_chart(fig, use_container_width=True)

        fig = px.pie(
            names=["Current Risk", "Safety Margin"],
            values=[min(assessment.probability, 100), max(0, 100 - assessment.probability)],
            color_discrete_sequence=["#ef4444", "#22c55e"],
            title="Risk Distribution"
        )
        st.plotly_chart(fig, use_container_width=True)

with tab_elevation:
    if not tab_available(state, "elevation"):
        st.info("Please select a mine first to view elevation models.")
    else:
        st.subheader(f"Digital Elevation Model: {state.selected_mine.name}")
        view_mode = st.radio("View", list(VIEW_MODES), horizontal=True)

        profile = elevation_profile(rng)
        summary = profile_summary(profile)
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Max Elevation", f"{summary['max_elevation']}m")
        col2.metric("Max Slope", f"{summary['max_slope']}°")
        col3.metric("Avg Stability", f"{summary['avg_stability']}%")
        col4.metric("High Risk Points", summary["high_risk_points"])

        fig = px.bar(
            profile,
            x="distance",
            y=view_mode,
            color="risk_level",
            color_discrete_map=RISK_COLORS,
            labels={"distance": "Distance (m)", view_mode: view_mode.title()}
        )
        st.plotly_chart(fig, use_container_width=True)

with tab_data:
    st.subheader("Data Sources")
    if st.button("Refresh feeds"):
        st.session_state.data_sources = tick_data_sources(st.session_state.data_sources, rng)

    sources = st.session_state.data_sources
    summary = data_source_summary(sources)
    col1, col2, col3 = st.columns(3)
    col1.metric("Online", summary["online"])
    col2.metric("Error", summary["error"])
    col3.metric("Data Points", summary["total_value"])

    st.dataframe(
        pd.DataFrame([source.to_dict() for source in sources])[
            ["name", "type", "status", "value", "unit", "threshold", "load", "last_update", "is_recording"]
        ],
        use_container_width=True
    )

with tab_forecast:
    if not tab_available(state, "forecast"):
        st.info("Please select a mine and run initial analysis to view AI forecasts.")
    else:
        st.subheader(f"AI Probability Forecast: {state.selected_mine.name}")
        time_range = st.radio("Time range", list(TIME_RANGES), horizontal=True)

        forecast = None
        if api_client is not None:
            try:
                forecast = api_client.get_forecast(state.selected_mine.id, state.assessment.level, time_range)
            except APIClientError as e:
                st.warning(f"Forecast service unavailable, using local model: {e}")
        if forecast is None or forecast.empty:
            forecast = probability_forecast(state.assessment.level, time_range, rng)

        summary = forecast_summary(forecast)
        col1, col2, col3 = st.columns(3)
        col1.metric("Current Probability", f"{summary['current_probability']}%")
        col2.metric("Confidence", f"{summary['avg_confidence']}%")
        col3.metric("Trend", summary["trend_direction"].title())

        fig = px.area(
            forecast,
            x="time",
            y="probability",
            labels={"time": "Time", "probability": "Probability (%)"},
            title="Rockfall Probability"
        )
        fig.update_yaxes(range=[0, 100])
        st.plotly_chart(fig, use_container_width=True)

        first = forecast.iloc[0]
        fig = px.bar(
            x=["Slope Instability", "Weather Conditions", "Vibration Patterns", "Historical Data"],
            y=[first["slope"], first["weather"], first["vibration"], first["historical"]],
            labels={"x": "Factor", "y": "Contribution"},
            title="Contributing Factors"
        )
        st.plotly_chart(fig, use_container_width=True)

with tab_alerts:
    if not tab_available(state, "alerts"):
        st.info("Please select a mine to activate the alert management system.")
    else:
        alerts = state.alerts
        st.subheader("Alert Management")

        auto = st.toggle("Automatic high risk alerts", value=alerts.auto_alerts_enabled)
        if auto != alerts.auto_alerts_enabled:
            dispatch(SetAutoAlerts(auto))
            st.rerun()

        cols = st.columns(len(CHANNELS))
        for col, channel in zip(cols, CHANNELS):
            if col.button(f"Send {channel}", key=f"send-{channel}"):
                dispatch(SendAlert(channel))
                st.rerun()

        counts = alerts.status_counts()
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Sent", counts["sent"])
        col2.metric("Pending", counts["pending"])
        col3.metric("Failed", counts["failed"])
        col4.metric("Total Dispatched", alerts.sent_count)

        for alert in alerts.alerts:
            with st.container(border=True):
                st.markdown(f"**{alert.channel.upper()}** → {alert.recipient} • `{alert.status}` • "
                            f"{alert.timestamp:%H:%M:%S} • {alert.risk_level}")
                st.write(alert.message)

# Footer
st.sidebar.markdown("---")
if state.selected_mine is not None:
    st.sidebar.caption(f"Monitoring {state.selected_mine.name}")
newest = state.alerts.alerts[0] if state.alerts.alerts else None
if newest is not None:
    elapsed = (pd.Timestamp.now() - pd.Timestamp(newest.timestamp)).total_seconds()
    st.sidebar.caption(f"Last alert {format_elapsed(max(0, elapsed))} ago")
st.sidebar.markdown("""
**Rockfall Risk Monitor**
Version 1.0.0
Data: simulated telemetry
""")

# Rerun once the oldest pending alert is due so delivery settles unattended
due = state.alerts.next_due()
if due is not None:
    time.sleep(max(0.0, (due - datetime.now()).total_seconds()))
    st.rerun()
