"""
Mark Six Predictor -- Streamlit Web Application

Pages: next-draw prediction, case-by-case back-test analysis, historical
results browser, and methodology/disclaimer.
"""
import os
import sys

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from marksix.aggregator import ACCURACY_BUCKETS
from marksix.config import DEFAULT_CASE_LIMIT, MAX_CASE_LIMIT, configure_logging
from marksix.errors import DataUnavailable
from marksix.service import PredictionService
from marksix.store import DrawStore, records_to_frame

configure_logging()

# -- Page Config ----------------------------------------------------------

st.set_page_config(
    page_title="Mark Six Predictor",
    page_icon="🎱",
    layout="wide",
    initial_sidebar_state="expanded",
)

# -- Custom CSS -----------------------------------------------------------

st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: 700;
        text-align: center;
        padding: 1rem 0;
        background: linear-gradient(90deg, #FF6B6B, #FFE66D, #4ECDC4);
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
    }
    .number-ball {
        display: inline-block;
        width: 48px;
        height: 48px;
        border-radius: 50%;
        text-align: center;
        line-height: 48px;
        font-size: 1.2rem;
        font-weight: 700;
        margin: 4px;
        color: white;
    }
    .ball-main { background: linear-gradient(135deg, #FF6B6B, #EE5A24); }
    .ball-extra { background: linear-gradient(135deg, #4ECDC4, #2ECC71); }
</style>
""", unsafe_allow_html=True)


def render_balls(numbers, extra):
    balls = "".join(f'<span class="number-ball ball-main">{n}</span>' for n in numbers)
    balls += f' + <span class="number-ball ball-extra">{extra}</span>'
    st.markdown(balls, unsafe_allow_html=True)


# -- Service (one per process) --------------------------------------------

@st.cache_resource
def get_service():
    store = DrawStore()
    store.load()
    return PredictionService(store)


@st.cache_data(ttl=3600)
def get_prediction(_service, history_key):
    return _service.enhanced_predict(skip_fetch=True)


@st.cache_data(ttl=3600)
def get_case_analysis(_service, history_key, limit, show_all):
    return _service.case_analysis(limit=limit, show_all=show_all)


service = get_service()

# -- Sidebar --------------------------------------------------------------

st.sidebar.markdown("## Mark Six Predictor")

page = st.sidebar.radio(
    "Navigate",
    ["Prediction", "Case Analysis", "Historical Results", "Methodology"],
)

st.sidebar.markdown("---")
if st.sidebar.button("Refresh data from HKJC"):
    with st.spinner("Fetching draw history from HKJC..."):
        updated = service.refresh()
    if updated:
        get_prediction.clear()
        get_case_analysis.clear()
        st.sidebar.success(f"Snapshot updated: {len(service.store)} draws")
    else:
        st.sidebar.warning("Fetch failed or returned nothing. Using existing data.")

st.sidebar.markdown(
    "**Disclaimer:** This is for entertainment purposes only. "
    "Mark Six is a random lottery -- no model can guarantee wins."
)

try:
    history = service.history()
except DataUnavailable:
    st.error("No historical data available. Use 'Refresh data from HKJC' or run "
             "`python scripts/update_data.py`.")
    st.stop()

df = records_to_frame(history)


# ==========================================================================
# PAGE 1: PREDICTION
# ==========================================================================

if page == "Prediction":
    st.markdown('<div class="main-header">Next Draw Prediction</div>', unsafe_allow_html=True)

    with st.spinner("Running progressive learning over the full history..."):
        result = get_prediction(service, service.history_key())

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Draws", result["data_used"]["total_draws"])
    with col2:
        dr = result["data_used"]["date_range"]
        st.metric("Date Range", f"{dr['from']} -> {dr['to']}")
    with col3:
        st.metric("Learning Steps", result["data_used"]["learning_steps"])
    with col4:
        st.metric("Back-test Accuracy", f"{result['analysis']['overall_accuracy']:.2f}%")

    st.markdown("---")
    st.subheader("Predicted Numbers")
    render_balls(result["predicted"], result["extra_number"])
    st.caption(f"Method: {result['method']} | Algorithm: {result['algorithm']} | "
               f"Confidence: {result['confidence']}")
    if result["status"] == "fallback":
        st.warning("The main analysis failed; this is the fallback frequency prediction.")

    recent = result["analysis"]["validation_results"]
    if recent:
        st.subheader("Most Recent Validation Steps")
        st.dataframe(pd.DataFrame([{
            "Step": c["step"],
            "Target Date": c["target_date"],
            "Actual": f"{c['target_numbers']} + {c['target_extra']}",
            "Predicted": f"{c['predicted_numbers']} + {c['predicted_extra']}",
            "Correct": c["correct_numbers"],
            "Accuracy %": round(c["accuracy"], 2),
            "Method": c["method"],
        } for c in recent]), use_container_width=True)


# ==========================================================================
# PAGE 2: CASE ANALYSIS
# ==========================================================================

elif page == "Case Analysis":
    st.markdown('<div class="main-header">Case-by-Case Back-test</div>', unsafe_allow_html=True)

    col_l, col_a = st.columns(2)
    with col_l:
        limit = st.number_input("Cases to show", min_value=1, max_value=MAX_CASE_LIMIT,
                                value=DEFAULT_CASE_LIMIT)
    with col_a:
        show_all = st.checkbox("Show all cases", value=False)

    with st.spinner("Back-testing every draw..."):
        report = get_case_analysis(service, service.history_key(), int(limit), show_all)
    stats = report["overall_stats"]

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Cases", stats["total_cases"])
    with col2:
        st.metric("Average Accuracy", stats["average_accuracy"])
    with col3:
        st.metric("Avg Correct Numbers", stats["average_correct_numbers"])
    with col4:
        st.metric("Perfect / Zero", f"{stats['perfect_matches']} / {stats['zero_matches']}")

    # -- Accuracy distribution ---------------------------------------------
    st.subheader("Accuracy Distribution")
    dist = report["accuracy_distribution"]
    labels = [label for label, _ in reversed(ACCURACY_BUCKETS)]
    fig = go.Figure(go.Bar(
        x=labels,
        y=[dist[label] for label in labels],
        marker_color="#4ECDC4",
        hovertemplate="%{x}<br>Cases: %{y}<extra></extra>",
    ))
    fig.update_layout(xaxis_title="Accuracy", yaxis_title="Cases",
                      template="plotly_dark", height=400)
    st.plotly_chart(fig, use_container_width=True)

    # -- Method performance ------------------------------------------------
    perf = report["method_performance"]
    if perf:
        st.subheader("Method Performance")
        perf_df = pd.DataFrame([
            {"Method": m, "Cases": p["cases"],
             "Avg Accuracy %": round(p["avg_accuracy"], 2),
             "Avg Correct Numbers": round(p["avg_correct_numbers"], 2)}
            for m, p in perf.items()
        ])
        fig = px.bar(perf_df, x="Method", y="Avg Accuracy %", color="Cases",
                     template="plotly_dark", color_continuous_scale="YlOrRd")
        fig.update_layout(height=400)
        st.plotly_chart(fig, use_container_width=True)
        st.dataframe(perf_df, use_container_width=True)

    # -- Cases -------------------------------------------------------------
    st.subheader(f"Cases ({report['analysis_config']['cases_shown']} shown)")
    st.dataframe(pd.DataFrame([{
        "Case": c["case_number"],
        "Step": c["step"],
        "Draws Used": c["training_data"]["draws_used"],
        "Method": c["training_data"]["method"],
        "Target Date": c["target"]["date"],
        "Actual": c["target"]["formatted"],
        "Predicted": c["predicted"]["formatted"],
        "Accuracy": c["accuracy"]["percentage"],
        "Grade": c["accuracy"]["grade"],
    } for c in report["cases"]]), use_container_width=True, height=600)


# ==========================================================================
# PAGE 3: HISTORICAL RESULTS
# ==========================================================================

elif page == "Historical Results":
    st.markdown('<div class="main-header">Historical Results Browser</div>', unsafe_allow_html=True)

    col_s1, col_s2 = st.columns(2)
    with col_s1:
        search_num = st.number_input("Search by number (1-49)", min_value=0, max_value=49, value=0)
    with col_s2:
        date_range = st.date_input("Date Range",
                                   value=(df["date"].min().date(), df["date"].max().date()),
                                   min_value=df["date"].min().date(),
                                   max_value=df["date"].max().date())

    filtered = df.copy()
    if len(date_range) == 2:
        filtered = filtered[
            (filtered["date"].dt.date >= date_range[0]) &
            (filtered["date"].dt.date <= date_range[1])
        ]

    if search_num > 0:
        mask = filtered["additional_number"] == search_num
        for i in range(1, 7):
            mask = mask | (filtered[f"num{i}"] == search_num)
        filtered = filtered[mask]

    st.markdown(f"**Showing {len(filtered)} draws**")
    st.dataframe(filtered, use_container_width=True, height=600)


# ==========================================================================
# PAGE 4: METHODOLOGY
# ==========================================================================

elif page == "Methodology":
    st.markdown('<div class="main-header">Methodology & Disclaimer</div>', unsafe_allow_html=True)

    st.subheader("Progressive Learning")
    st.markdown("""
    The back-test walks through the history oldest first. Draw 1 predicts draw 2,
    draws 1-2 predict draw 3, and so on. Each prediction only sees earlier draws.

    The strategy depends on how many draws are available:

    1. **Single Draw Variation** (1 draw) -- each number nudged by -3..+3
    2. **Trend Analysis** (2-4 draws) -- per-position linear extrapolation
    3. **Frequency Analysis** (5-19 draws) -- six most frequent numbers
    4. **Advanced Pattern Ensemble** (20+ draws) -- recent frequency, common
       pairs and triplets, then overdue numbers
    """)

    st.subheader("Accuracy")
    st.markdown("""
    One point per predicted main number found in the actual draw, plus one for
    the extra number, out of 7. 100% means all six numbers and the extra number.
    """)

    st.markdown("---")
    st.subheader("Honest Disclaimer")
    st.error("""
    **This model CANNOT predict truly random outcomes.**

    Mark Six numbers are drawn by a random process and each draw is independent.
    A random ticket is expected to match 6 x 6 / 49 ~ 0.73 main numbers, and the
    back-test accuracy above should be read against that baseline.

    **Play responsibly. Never spend more than you can afford to lose.**
    """)
