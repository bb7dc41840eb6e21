import streamlit as st
import numpy as np
import pandas as pd
import plotly.graph_objects as go
from binary_stride_exercise.searches import search_crossover
from binary_stride_exercise.benchmark import METHODS, SUMMARY_HEADERS, run_benchmark, summarize, crossover_trace
from binary_stride_exercise.data_loader import DISTRIBUTIONS, generate_dataset, generate_bucketed

st.set_page_config(page_title="Binary Stride Benchmark Dashboard", layout="wide")

st.title("Binary Search vs Binary Stride")
st.markdown("Benchmark the classic bisecting search against the stride search on sorted data, "
            "and explore how the stride search finds the crossover point of a monotonic predicate.")

st.sidebar.header("Configuration")

st.sidebar.subheader("Dataset")
distribution = st.sidebar.radio(
    "Distribution",
    options=list(DISTRIBUTIONS),
    help="Shape of the generated sorted data"
)
dataset_size = st.sidebar.number_input(
    "Dataset Size",
    min_value=1,
    max_value=2000000,
    value=100000,
    step=10000,
    help="Number of data points to generate"
)

if distribution == "bucketed":
    num_buckets = st.sidebar.slider("Number of Buckets", min_value=2, max_value=64, value=20)
    skew = st.sidebar.slider(
        "Skew",
        min_value=-3.0,
        max_value=3.0,
        value=1.0,
        step=0.5,
        help="Exponent of the bucket height ramp; negative values put the mass at the low end"
    )
    bucket_heights = [(i + 1) ** skew for i in range(num_buckets)]
else:
    bucket_heights = None

seed = st.sidebar.number_input("Seed", min_value=0, max_value=2**31 - 1, value=42)

st.sidebar.subheader("Benchmark")
num_runs = st.sidebar.number_input(
    "Number of Benchmark Runs",
    min_value=1,
    max_value=1000,
    value=100,
    help="Number of random queries to average results over"
)
miss_rate = st.sidebar.slider(
    "Miss Rate",
    min_value=0.0,
    max_value=1.0,
    value=0.1,
    step=0.05,
    help="Fraction of queries looking for a value absent from the data"
)

st.sidebar.subheader("Methods to Benchmark")
selected_methods = {}
for name in METHODS:
    # Full scan is linear, off by default
    if st.sidebar.checkbox(name, value=(name != "Full Scan")):
        selected_methods[name] = METHODS[name]

run_benchmark_clicked = st.sidebar.button("Run Benchmark", type="primary")

if 'results' not in st.session_state:
    st.session_state.results = None
    st.session_state.values = None


def load_data():
    """Generate the configured dataset"""
    if distribution == "bucketed":
        return generate_bucketed(bucket_heights, int(dataset_size), seed=int(seed))
    return generate_dataset(distribution, int(dataset_size), seed=int(seed))


def show_distribution(values):
    """Histogram of the generated values"""
    num_bins = 50
    hist_counts, _ = np.histogram(values, bins=num_bins)

    hist_fig = go.Figure()
    hist_fig.add_trace(go.Bar(
        x=list(range(1, num_bins + 1)),
        y=hist_counts,
        marker=dict(color='steelblue', line=dict(width=1, color='darkblue')),
        name='Values',
        hovertemplate='Bin %{x}<br>Count: %{y}<extra></extra>',
        opacity=0.7
    ))
    hist_fig.update_layout(
        title=f"Value Distribution ({num_bins} bins)",
        xaxis_title="Bin Number",
        yaxis_title="Count",
        height=400,
        showlegend=False
    )
    st.plotly_chart(hist_fig, use_container_width=True)

    col_stats1, col_stats2, col_stats3, col_stats4 = st.columns(4)
    with col_stats1:
        st.metric("Total Points", f"{len(values):,}")
    with col_stats2:
        st.metric("Min Value", f"{min(values):,}")
    with col_stats3:
        st.metric("Max Value", f"{max(values):,}")
    with col_stats4:
        st.metric("Unique Values", f"{len(set(values)):,}")


def run_benchmark_pipeline():
    """Generate the data and run every selected method on the same queries"""
    progress_bar = st.progress(0)
    status_text = st.empty()

    status_text.text("Generating data...")
    progress_bar.progress(10)
    try:
        values = load_data()
    except ValueError as e:
        st.error(str(e))
        return None, None

    status_text.text(f"Running {num_runs} benchmark queries...")
    progress_bar.progress(40)
    all_results = run_benchmark(values, int(num_runs), methods=selected_methods, seed=int(seed), miss_rate=miss_rate)

    progress_bar.progress(100)
    status_text.text("Benchmark complete!")
    return pd.DataFrame(summarize(all_results), columns=SUMMARY_HEADERS), values


def show_crossover_explorer(values):
    """Plot a threshold predicate over the data and mark the crossover found by the stride search"""
    st.markdown("---")
    st.subheader("Crossover Explorer")
    st.markdown("The predicate is `value - threshold`. The stride search returns the last index "
                "where it is still non-positive.")

    lo, hi = int(values[0]), int(values[-1])
    threshold = st.slider("Threshold", min_value=lo, max_value=max(hi, lo + 1), value=(lo + hi) // 2)
    predicate = lambda v: v - threshold

    if predicate(values[0]) > 0:
        st.warning("The predicate is already positive at index 0, so there is no crossover to find.")
        return

    crossover = search_crossover(values, predicate)
    trace = crossover_trace(values, predicate)

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Crossover Index", f"{crossover:,}")
    with col2:
        st.metric("Value at Crossover", f"{values[crossover]:,}")

    # Downsample for plotting
    step = max(1, len(values) // 2000)
    indices = np.arange(0, len(values), step)
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=indices,
        y=[predicate(values[i]) for i in indices],
        mode='lines',
        line=dict(color='seagreen', width=2),
        name='Predicate'
    ))
    fig.add_trace(go.Scatter(
        x=[pos for _, pos in trace],
        y=[predicate(values[pos]) for _, pos in trace],
        mode='markers+lines',
        marker=dict(size=8, color='darkorange'),
        line=dict(color='darkorange', dash='dot'),
        name='Stride Positions'
    ))
    fig.add_vline(x=crossover, line=dict(color='red', dash='dash'))
    fig.update_layout(
        title="Predicate over the Data",
        xaxis_title="Index",
        yaxis_title="value - threshold",
        height=450,
        showlegend=True
    )
    st.plotly_chart(fig, use_container_width=True)

    st.dataframe(pd.DataFrame(trace, columns=["Stride", "Position"]), use_container_width=True, hide_index=True)


# Run benchmark when button is clicked
if run_benchmark_clicked:
    if not selected_methods:
        st.warning("Please select at least one method to benchmark!")
    else:
        with st.spinner("Running benchmark..."):
            result_df, values = run_benchmark_pipeline()
            if result_df is not None:
                st.session_state.results = result_df
                st.session_state.values = values

# Display results
if st.session_state.results is not None:
    values = st.session_state.values

    st.markdown("---")
    st.subheader("Data Distribution")
    show_distribution(values)

    st.markdown("---")
    st.subheader("Benchmark Results")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Dataset Size", f"{len(values):,} points")
    with col2:
        st.metric("Distribution", distribution)
    with col3:
        st.metric("Benchmark Runs", num_runs)

    st.dataframe(st.session_state.results, use_container_width=True, hide_index=True)

    st.markdown("---")
    st.subheader("Performance Comparison")

    tab1, tab2 = st.tabs(["Average Time", "Average Comparisons"])

    with tab1:
        chart_data = st.session_state.results.copy()
        chart_data['Avg Time (µs)'] = chart_data['Avg Time (µs)'].astype(float)
        st.bar_chart(chart_data.set_index('Search Method')['Avg Time (µs)'])

    with tab2:
        chart_data = st.session_state.results.copy()
        chart_data['Avg Comparisons'] = chart_data['Avg Comparisons'].astype(float)
        st.bar_chart(chart_data.set_index('Search Method')['Avg Comparisons'])

    show_crossover_explorer(values)

else:
    st.info("Configure your benchmark settings in the sidebar and click 'Run Benchmark' to start.")

    st.markdown("""
    ### How to Use

    1. **Select a Distribution**: uniform, heavy duplicates, KDE clusters, or a bucketed histogram
    2. **Configure Dataset**: Set the dataset size and seed
    3. **Select Methods**: Choose which search methods to benchmark
    4. **Run Benchmark**: Click the "Run Benchmark" button to start the evaluation
    5. **Explore the Crossover**: Move the threshold and watch where the stride search lands

    ### The Two Searches

    - **Binary Search** keeps a closed interval and probes its midpoint, `lo + (hi - lo) // 2`
    - **Binary Stride** walks from the left with jumps of n/2, n/4, ..., 1, never stepping past the needle
    """)
