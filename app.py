"""
Walking Route Planner
=====================

Drop address pins on the map and draw the shortest walking route
connecting them in order.

Run with: streamlit run app.py
"""

import logging

import streamlit as st
from streamlit_folium import st_folium

from config import (
    ADD_TITLE, ADD_PLACEHOLDER, ERROR_TITLE, GEOCODING_ERROR_MESSAGE,
    DIRECTIONS_ERROR_MESSAGE, MAP_HEIGHT, LOG_LEVEL, LOG_FORMAT
)
from geocoding import GeocodingError
from map_view import build_map, legs_table
from route_planner import RoutePlanner
from utils import format_distance, format_duration

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger(__name__)

# Page config
st.set_page_config(
    page_title="Walking Route Planner",
    page_icon="🚶",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #1f77b4;
        text-align: center;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1.1rem;
        color: #666;
        text-align: center;
        margin-bottom: 1.5rem;
    }
</style>
""", unsafe_allow_html=True)

# Initialize session state
if 'planner' not in st.session_state:
    st.session_state.planner = RoutePlanner()
if 'show_add_form' not in st.session_state:
    st.session_state.show_add_form = False
if 'last_error' not in st.session_state:
    st.session_state.last_error = None

planner: RoutePlanner = st.session_state.planner

# Header
st.markdown('<div class="main-header">🚶 Walking Route Planner</div>', unsafe_allow_html=True)
st.markdown('<div class="sub-header">Add addresses and draw the shortest walking route between them</div>',
            unsafe_allow_html=True)

# Buttons
col1, col2, col3 = st.columns([1, 1, 1])
with col1:
    if st.button("🔄 Reset", key="reset", use_container_width=True, disabled=not planner.can_reset):
        planner.reset()
        st.session_state.show_add_form = False
        st.session_state.last_error = None
        st.rerun()
with col2:
    if st.button("🔀 Route", key="route", use_container_width=True, type="primary",
                 disabled=not planner.can_route):
        with st.spinner("Requesting walking directions..."):
            result = planner.build_route()
        st.session_state.last_error = None if result.ok else DIRECTIONS_ERROR_MESSAGE
        st.rerun()
with col3:
    if st.button(f"➕ {ADD_TITLE}", key="add", use_container_width=True):
        st.session_state.show_add_form = True
        st.session_state.last_error = None

# Add dialog
if st.session_state.show_add_form:
    with st.form("add_address", clear_on_submit=True):
        st.markdown(f"### {ADD_TITLE}")
        address = st.text_input("Address", placeholder=ADD_PLACEHOLDER, label_visibility="collapsed")
        col_search, col_cancel = st.columns(2)
        with col_search:
            search = st.form_submit_button("Search", type="primary", use_container_width=True)
        with col_cancel:
            cancel = st.form_submit_button("Cancel", use_container_width=True)

    if search:
        try:
            with st.spinner("Looking up address..."):
                planner.add_address(address)
        except GeocodingError as e:
            logger.error(f"Geocoding failed: {e}")
            st.session_state.last_error = GEOCODING_ERROR_MESSAGE
        st.session_state.show_add_form = False
        st.rerun()
    elif cancel:
        st.session_state.show_add_form = False
        st.rerun()

# Error alert
if st.session_state.last_error:
    st.error(f"**{ERROR_TITLE}**: {st.session_state.last_error}")

st.divider()

# Map
col_map, col_list = st.columns([3, 1])

with col_map:
    m = build_map(planner.annotations, planner.overlays)
    st_folium(m, width=None, height=MAP_HEIGHT, key="route_map", returned_objects=[])

with col_list:
    st.markdown("### 📍 Addresses")

    if planner.annotations:
        for idx, annotation in enumerate(planner.annotations, start=1):
            st.write(f"{idx}. {annotation.title}")
    else:
        st.info("No addresses yet.\n\nPress Add to place a pin.")

    summary = planner.route_summary()
    if summary:
        distance, duration = summary
        st.divider()
        st.metric("Total Distance", format_distance(distance))
        st.metric("Walking Time", format_duration(duration))

if planner.overlays:
    st.dataframe(legs_table(planner.overlays), use_container_width=True, hide_index=True)

# Instructions at bottom
st.divider()
with st.expander("💡 Instructions"):
    st.markdown("""
    1. Press **Add** and search for an address; a pin is placed on the map
    2. Add at least two addresses to enable **Route**
    3. Press **Route** to draw the shortest walking route through the pins in order
    4. Press **Reset** to clear all pins and routes
    """)
