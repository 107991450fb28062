import streamlit as st


def render_documentation() -> None:
    st.header("📚 Documentation")
    st.markdown(
        """
SafeScan reads a product barcode, fetches the ingredient list from Open Food Facts
and flags the product when it contains anything on the active profile's denylist.
"""
    )

    st.divider()
    st.subheader("✅ Quickstart")
    st.markdown(
        """
- **Start the app:** `python run.py` (or run API + UI separately).
- **Open the UI:** `http://127.0.0.1:8501`.
- **Pick a profile:** `Baby` or `Allergy` via *Change Profile*.
- **Scan:** take a picture of an EAN-13 / UPC-A / UPC-E barcode, or type it.
- **Acknowledge:** the camera comes back only after you dismiss the result.
- **Desktop webcam mode:** `safescan-desktop`.
"""
    )

    st.markdown(
        """
Environment setup:
- `SAFESCAN_PRODUCT_API_URL` overrides the lookup endpoint (must contain `{barcode}`).
- `SAFESCAN_LOOKUP_TIMEOUT` sets a lookup timeout in seconds (unset: wait forever).
- `SAFESCAN_DEFAULT_PROFILE`, `SAFESCAN_CAMERA_INDEX`, `SAFESCAN_LOG_LEVEL`.
- `API_URL` / `API_DOCS_URL` override Streamlit links.
- Denylists live in `config/scan_config.json`.
"""
    )

    st.subheader("🧠 What happens when a barcode is read?")
    st.markdown(
        """
1. **Scan gate** (`safescan/services/scan_gate.py`) admits one cycle; extra reads are dropped
   and the camera is paused.
2. **Lookup** against Open Food Facts (`safescan/services/sources/openfoodfacts.py`).
3. **Verdict**: every denylist token contained in the lower-cased ingredient text
   (`safescan/services/verdict_evaluator.py`). Plain substring match, so `egg` also
   matches `eggplant`.
4. **Alert** (`safescan/services/presenter.py`): Warning, Safe, Not Found or Error.
5. **Acknowledge** releases the gate. Lookup errors release it immediately.
"""
    )

    st.markdown(
        """
Default denylists:

| Profile | Tokens |
|---|---|
| Baby | honey, sugar, salt, palm oil |
| Allergy | peanuts, milk, egg, gluten |
"""
    )
