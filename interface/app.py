# interface/app.py
"""
Label Scanner - Main Application

Streamlit interface: capture or upload a product label, read it, and show the
structured product record.
"""

import logging

import pandas as pd
import streamlit as st

from config import LOG_DATE_FORMAT, LOG_FORMAT, MAX_IMAGE_SIZE_MB
from domain.product import ProductRecord
from extraction import has_meaningful_data
from input_readers import OcrWorker, guess_mime_type
from interface.advisory import raw_text_preview
from interface.processor import process_label

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

STRATEGY_LABELS = {
    "text": "read from on-device text",
    "vision": "read from the image",
}

BASIC_FIELDS = [
    ("Product", "name"),
    ("Company", "company"),
    ("Manufacturer", "manufacturer"),
    ("Trademark", "trademark"),
    ("Barcode", "barcode"),
    ("Net Weight", "net_weight"),
    ("MRP", "mrp"),
    ("Price", "price"),
    ("Expiry Date", "expiry_date"),
    ("Best Before", "best_before"),
    ("Manufacturing Date", "manufacturing_date"),
    ("Batch Number", "batch_number"),
    ("FSSAI License", "fssai_license"),
    ("Vegetarian", "vegetarian"),
]


def _pairs_frame(pairs) -> pd.DataFrame:
    rows = [{"Field": label, "Value": value} for label, value in pairs if value is not None]
    return pd.DataFrame(rows, columns=["Field", "Value"])


def render_record(record: ProductRecord) -> None:
    basic = _pairs_frame((label, getattr(record, name)) for label, name in BASIC_FIELDS)
    if not basic.empty:
        st.subheader("Product Details")
        st.dataframe(basic, hide_index=True, width="stretch")

    if record.ingredients:
        st.subheader("Ingredients")
        st.write(", ".join(record.ingredients))

    if record.nutritional_info:
        st.subheader("Nutritional Information")
        nutrition = record.nutritional_info
        st.dataframe(
            _pairs_frame(
                (name.replace("_", " ").title(), getattr(nutrition, name))
                for name in type(nutrition).model_fields
            ),
            hide_index=True,
            width="stretch",
        )

    if record.manufacturing_addresses:
        st.subheader("Manufacturing Addresses")
        for address in record.manufacturing_addresses:
            st.markdown(f"- {address}")

    if record.consumer_contact:
        st.subheader("Consumer Contact")
        contact = record.consumer_contact
        st.dataframe(
            _pairs_frame((name.title(), getattr(contact, name)) for name in type(contact).model_fields),
            hide_index=True,
            width="stretch",
        )

    if record.other_details:
        st.subheader("Other Details")
        st.dataframe(_pairs_frame(record.other_details.items()), hide_index=True, width="stretch")

    with st.expander("JSON"):
        st.json(record.to_json_dict())


# ============================================================================
# PAGE CONFIG
# ============================================================================
st.set_page_config(
    page_title="Label Scanner",
    page_icon="🏷️",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# ============================================================================
# SESSION STATE INITIALIZATION
# ============================================================================
if "report" not in st.session_state:
    st.session_state.report = None
if "use_ocr" not in st.session_state:
    st.session_state.use_ocr = True
if "ocr_worker" not in st.session_state:
    st.session_state.ocr_worker = None

# ============================================================================
# MAIN APP FLOW
# ============================================================================
st.title("🏷️ Product Label Scanner")
st.caption("Capture or upload a product label to extract its details.")

st.session_state.use_ocr = st.toggle("Read text on device first", value=st.session_state.use_ocr)

source = st.radio("Image source", ["Upload", "Camera"], horizontal=True)
if source == "Camera":
    image_file = st.camera_input("Take a photo of the label")
else:
    image_file = st.file_uploader("Upload a label image", type=["png", "jpg", "jpeg", "webp"])

if image_file is not None:
    image_bytes = image_file.getvalue()

    if len(image_bytes) > MAX_IMAGE_SIZE_MB * 1024 * 1024:
        st.error(f"❌ Image is larger than {MAX_IMAGE_SIZE_MB} MB.")
    elif st.button("🔍 Scan Label", type="primary", width="stretch"):
        worker = None
        if st.session_state.use_ocr:
            if st.session_state.ocr_worker is None:
                st.session_state.ocr_worker = OcrWorker()
            worker = st.session_state.ocr_worker

        mime_type = image_file.type or guess_mime_type(image_file.name)
        with st.spinner("🔄 Reading label..."):
            st.session_state.report = process_label(image_bytes, mime_type, ocr_worker=worker)

# ============================================================================
# RESULTS SECTION
# ============================================================================
report = st.session_state.report
if report is not None:
    advisory = report.advisory
    if advisory is not None:
        show = {"info": st.info, "warning": st.warning}.get(advisory.level, st.error)
        show(advisory.message)

    outcome = report.outcome
    if outcome is not None:
        if has_meaningful_data(outcome.record):
            st.success(f"✅ Label scanned! ({STRATEGY_LABELS.get(report.strategy, report.strategy)})")
            render_record(outcome.record)

        raw_text = raw_text_preview(outcome.source_text)
        if raw_text and (outcome.failure is not None or not has_meaningful_data(outcome.record)):
            st.subheader("Extracted Text")
            st.text(raw_text)

    if st.button("Reset", width="stretch"):
        if st.session_state.ocr_worker is not None:
            st.session_state.ocr_worker.close()
        for key in list(st.session_state.keys()):
            del st.session_state[key]
        st.rerun()
