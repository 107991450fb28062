import streamlit as st
import requests
import os
from PIL import Image

from safescan.core.rules import LOOKUP_FAILED_MESSAGE, SAFE_TITLE
from safescan.models import Profile
from safescan.services.camera import decode_frame
from safescan.services.scan_gate import ScanGate
from safescan.ui.documentation import render_documentation

# Configuration
API_URL = os.getenv("API_URL", "http://127.0.0.1:8000/api/scan")
API_DOCS_URL = os.getenv("API_DOCS_URL", "http://127.0.0.1:8000/docs")

st.set_page_config(page_title="SafeScan", layout="centered")

# Per-browser-session state survives Streamlit reruns
if "gate" not in st.session_state:
    st.session_state.gate = ScanGate()
    st.session_state.profile = Profile.BABY
    st.session_state.alert = None
    st.session_state.camera_key = 0

gate: ScanGate = st.session_state.gate


def toggle_profile():
    st.session_state.profile = st.session_state.profile.toggled()


def acknowledge():
    st.session_state.alert = None
    # A fresh key clears the last snapshot so it is not scanned again
    st.session_state.camera_key += 1
    gate.release()


def run_scan(barcode: str):
    if not gate.try_admit():
        return
    st.session_state.alert = None
    try:
        response = requests.post(API_URL, json={
            "barcode": barcode,
            "profile": st.session_state.profile.value
        })
        if response.status_code == 200:
            data = response.json()
            st.session_state.last_result = data
            st.session_state.alert = data["alert"]
        else:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            message = payload.get("message", response.text) if isinstance(payload, dict) else response.text
            st.error(f"Error: {message}")
    except requests.exceptions.ConnectionError:
        st.error("Could not connect to the API. Is the backend running? (`uvicorn safescan.main:app`)")
    except (requests.RequestException, ValueError, KeyError, TypeError) as exc:
        st.error(f"Error: {LOOKUP_FAILED_MESSAGE} ({exc})")
    finally:
        # Only a shown result keeps the gate closed; every other exit reopens the camera
        if st.session_state.alert is None:
            gate.release()
            st.session_state.camera_key += 1


col1, col2 = st.columns([4, 1])
with col1:
    st.title("SafeScan")
with col2:
    st.link_button("API Docs", API_DOCS_URL, type="secondary", use_container_width=True)

scan_tab, docs_tab = st.tabs(["📷 Scan", "📚 Documentation"])

with scan_tab:
    header, switch = st.columns([3, 1])
    with header:
        st.subheader(f"Current Mode: {st.session_state.profile.value}")
    with switch:
        st.button("Change Profile", on_click=toggle_profile, disabled=gate.is_busy)

    if gate.is_busy and st.session_state.alert:
        # Camera and manual entry are hidden until the result is acknowledged
        alert = st.session_state.alert
        box = st.warning if alert["title"] != SAFE_TITLE else st.success
        box(f"**{alert['title']}**\n\n{alert['message']}")
        for action in alert["actions"]:
            st.button(action, on_click=acknowledge, key=f"ack_{action}", type="primary")
        result = st.session_state.get("last_result") or {}
        if result.get("ingredients_text"):
            with st.expander("Ingredients", expanded=False):
                st.write(result["ingredients_text"])
    else:
        snapshot = st.camera_input("Place barcode inside the frame", key=f"camera_{st.session_state.camera_key}")
        manual = st.text_input("...or type the barcode", placeholder="e.g. 3017620422003")

        barcode = None
        if snapshot is not None:
            events = decode_frame(Image.open(snapshot))
            if events:
                barcode = events[0].data
            else:
                st.info("No EAN-13 / UPC barcode found in the picture. Try again.")
        if barcode is None and st.button("Check", type="primary") and manual.strip():
            barcode = manual.strip()

        if barcode:
            with st.spinner(f"Looking up {barcode}..."):
                run_scan(barcode)
            if gate.is_busy:
                st.rerun()

with docs_tab:
    render_documentation()
