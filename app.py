"""Streamlit Web App - Property Price Estimator."""

import sys
from pathlib import Path

import matplotlib.pyplot as plt
import streamlit as st

PROJECT_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from property_market.data.loader import load_reference_corpus
from property_market.estimator.errors import EstimationError
from property_market.estimator.knn import estimate_price, select_nearest
from property_market.utils.config import load_config, resolve_path


# ==================================================
# Corpus Loading
# ==================================================
@st.cache_resource
def load_corpus():
    config = load_config()
    path = resolve_path(config["data"]["corpus_path"])
    return load_reference_corpus(path), config["estimator"]["n_neighbors"]


# ==================================================
# Page Config
# ==================================================
st.set_page_config(
    page_title="Estimasi Harga Properti",
    page_icon="🏠",
    layout="wide",
)

st.title("🏠 Estimasi Harga Properti")
st.caption("Nearest-neighbor price range from comparable properties")

corpus, n_neighbors = load_corpus()
st.sidebar.success(f"Dataset: **{len(corpus)}** reference properties, k = {n_neighbors}")

PRESETS = {
    "Custom": {},
    "Rumah Subsidi": {"jumlah_lantai": 1, "kamar_tidur": 2, "kamar_mandi": 1, "luas_bangunan": 36, "luas_tanah": 72, "jumlah_carport": 1, "jumlah_garage": 0},
    "Rumah Keluarga": {"jumlah_lantai": 2, "kamar_tidur": 3, "kamar_mandi": 2, "luas_bangunan": 100, "luas_tanah": 96, "jumlah_carport": 1, "jumlah_garage": 0},
    "Rumah Mewah": {"jumlah_lantai": 3, "kamar_tidur": 5, "kamar_mandi": 4, "luas_bangunan": 250, "luas_tanah": 220, "jumlah_carport": 2, "jumlah_garage": 1},
}

st.sidebar.header("📋 Contoh")
preset = PRESETS[st.sidebar.selectbox("Pilih contoh properti", list(PRESETS.keys()))]

# ==================================================
# Inputs - unticked features are left out of the distance
# ==================================================
FIELDS = [
    ("jumlah_lantai", "Jumlah lantai", 1),
    ("kamar_tidur", "Kamar tidur", 2),
    ("kamar_mandi", "Kamar mandi", 1),
    ("luas_bangunan", "Luas bangunan (m²)", 60),
    ("luas_tanah", "Luas tanah (m²)", 72),
    ("jumlah_carport", "Carport", 1),
    ("jumlah_garage", "Garasi", 0),
]

query = {}
cols = st.columns(len(FIELDS))
for col, (key, label, default) in zip(cols, FIELDS):
    with col:
        use = st.checkbox(label, value=True, key=f"use_{key}")
        value = st.number_input(label, min_value=0, value=preset.get(key, default), key=key, label_visibility="collapsed")
        if use:
            query[key] = value

# ==================================================
# Estimate
# ==================================================
if not query:
    st.warning("Rp. 0 - pilih minimal satu fitur")
else:
    try:
        result = estimate_price(corpus, query, k=n_neighbors)
    except EstimationError as e:
        st.error(f"Estimasi gagal: {e}")
        st.stop()

    st.metric("Estimasi harga", result.price_range)
    st.caption(f"{result.neighbor_count} neighbors, max distance {result.max_distance}")

    neighbors = select_nearest(corpus, query, k=n_neighbors)
    st.subheader("Properti terdekat")
    st.dataframe(neighbors, use_container_width=True)

    fig, ax = plt.subplots(figsize=(6, 3))
    labels = [f"#{i}" for i in neighbors.index]
    ax.barh(labels, neighbors["distance"], color="#4c72b0")
    ax.set_xlabel("Distance")
    ax.invert_yaxis()
    st.pyplot(fig)
