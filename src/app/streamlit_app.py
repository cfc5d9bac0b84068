"""Streamlit web app for document comparison."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import streamlit as st

from compare_utils.errors import DocCompareError
from compare_utils.report import render_html_report
from doc_compare import ComparisonOptions, compare_documents, options_from_env

logging.basicConfig(
    level=getattr(logging, os.environ.get("DOC_COMPARE_LOG_LEVEL", "WARNING").upper(), logging.WARNING),
    format="[%(levelname)s] %(message)s",
)

st.set_page_config(page_title="Document Compare", page_icon="🧾", layout="wide")

# Session state
if "reports" not in st.session_state:
    st.session_state.reports = []

defaults = options_from_env()

# Sidebar
st.sidebar.title("🧾 Document Compare")
threshold = st.sidebar.slider(
    "Pixel tolerance",
    min_value=0.0,
    max_value=1.0,
    value=float(defaults.pixel_threshold),
    step=0.05,
    help="Colour distance under which two pixels still count as equal.",
)
max_samples = st.sidebar.number_input("Example words per category", min_value=0, max_value=50, value=min(defaults.max_text_samples, 50))

st.sidebar.markdown("---")
st.sidebar.markdown("#### Recent reports")
if not st.session_state.reports:
    st.sidebar.caption("No reports yet.")
else:
    for i, rep in enumerate(st.session_state.reports[:5]):
        st.sidebar.download_button(
            key=f"sdl_{i}", label=rep["title"], data=rep["html"], file_name=rep["title"], mime="text/html",
            use_container_width=True,
        )
    if st.sidebar.button("Clear all reports", type="secondary"):
        st.session_state.reports = []
        st.rerun()


def _render_results(report) -> None:
    st.markdown("### Analysis results")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Text similarity", f"{report.text_similarity:.2f}%")
    c2.metric("Text divergences", report.text_divergence_count)
    c3.metric("Layout similarity", f"{report.layout_similarity:.2f}%")
    c4.metric("Layout divergences", f"{report.layout_divergence_count:,}")

    if report.has_divergences:
        st.markdown("#### Divergence details")
        ct, cl = st.columns(2)
        with ct:
            if report.text_divergence_samples:
                st.markdown("**Text divergences**")
                st.markdown("\n".join(f"- {s}" for s in report.text_divergence_samples))
        with cl:
            if report.layout_divergence_samples:
                st.markdown("**Layout divergences**")
                st.markdown("\n".join(f"- {s}" for s in report.layout_divergence_samples))


def _compare_flow() -> None:
    st.markdown("### Upload and compare")
    c1, c2 = st.columns(2, gap="large")
    with c1:
        file_a = st.file_uploader("Original PDF", type=["pdf"], key="pdf_a")
    with c2:
        file_b = st.file_uploader("PDF to compare", type=["pdf"], key="pdf_b")

    _, center_col, _ = st.columns([1, 0.6, 1])
    with center_col:
        compare_btn = st.button(
            "Compare files",
            type="primary",
            use_container_width=True,
            disabled=not (file_a and file_b),
        )

    if not compare_btn:
        return

    options = ComparisonOptions(
        pixel_threshold=threshold,
        max_text_samples=int(max_samples),
        scale=defaults.scale,
        raster_failure=defaults.raster_failure,
    )
    with st.spinner("Analysing… This may take a moment."):
        try:
            report = compare_documents(file_a.getvalue(), file_b.getvalue(), options=options)
        except DocCompareError as e:
            st.error(f"Comparison failed: {e}")
            return

    st.success("Comparison complete.")
    _render_results(report)

    meta = {"A": file_a.name, "B": file_b.name}
    html = render_html_report(report, meta=meta)
    fname = f"report_{Path(file_a.name).stem}_vs_{Path(file_b.name).stem}.html"
    st.session_state.reports.insert(0, {"title": fname, "html": html})
    st.session_state.reports = st.session_state.reports[:10]
    st.download_button(label="Download HTML report", data=html, file_name=fname, mime="text/html")


_compare_flow()
