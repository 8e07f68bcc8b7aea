import io
import logging

import streamlit as st
import pandas as pd
import numpy as np
import plotly.express as px
import plotly.graph_objects as go

from components.benchmark import BenchConfig, run_benchmark, summarize
from components.workload import WorkLoad
from tries.ternary_tree import TernaryTree

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger("ternary-bench")

DEMO_PAIRS = [("SPACE", 10), ("APPLE", 20), ("TIGER", 70), ("SPACES", 30), ("APPS", 80)]

# Configure page
st.set_page_config(
    page_title="Ternary Search Tree Bench",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)


def demo_tree():
    tree = TernaryTree()
    tree.batch_insert(DEMO_PAIRS)
    return tree


def captured(write):
    """Run a `file=`-style writer and return what it wrote."""
    buf = io.StringIO()
    write(file=buf)
    return buf.getvalue()


if "tree" not in st.session_state:
    st.session_state["tree"] = demo_tree()
tree = st.session_state["tree"]

# Main title
st.title("🌳 Ternary Search Tree Bench")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Home", "Build Tree", "Query & Remove", "Structure", "Benchmark"]
    )

    st.markdown("---")
    st.subheader("Quick Actions")
    if st.button("🔄 Reset to demo keys"):
        st.session_state["tree"] = demo_tree()
        st.rerun()
    if st.button("🗑️ Make empty"):
        tree.make_empty()
        st.rerun()

# Main content area
if page == "Home":
    st.header("Welcome to the Ternary Search Tree Bench")

    st.markdown("""
    A ternary search tree stores one character per node and branches three ways:
    **low** for smaller characters, **middle** for the next character of the same key,
    **high** for greater characters.

    **Sections:**
    - 🏗️ Build a tree from generated keys
    - 🔍 Look up, insert and remove single keys
    - 🧬 Inspect the ordered listing and the pre-order structure
    - ⏱️ Benchmark insert / lookup / remove
    """)

    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Keys", tree.size())

    with col2:
        st.metric("Nodes", tree.count_nodes())

    with col3:
        st.metric("Height", tree.height())

    with col4:
        st.metric("Avg branch factor", f"{tree.count_nodes(get_avg_branch_factor=True):.2f}")

elif page == "Build Tree":
    st.header("🏗️ Build Tree")

    col1, col2 = st.columns(2)
    with col1:
        source = st.radio("Key source", ["Synthetic keys", "Natural words"])
        num_keys = st.number_input("Number of keys", min_value=1, max_value=200_000, value=1_000, step=100)
        seed = st.number_input("Seed", min_value=0, value=42, step=1)
    with col2:
        p_freq = st.slider("Prefix frequency", 0.0, 1.0, 0.0, 0.05,
                           help="Higher values make keys share prefixes more often",
                           disabled=source != "Synthetic keys")
        min_len, max_len = st.slider("Key length", 1, 30, (3, 10),
                                     disabled=source != "Synthetic keys")
        replace = st.checkbox("Replace current tree", value=True)

    if st.button("Build"):
        try:
            wl = WorkLoad(seed=int(seed), min_len=min_len, max_len=max_len)
            if source == "Synthetic keys":
                keys = wl.keys(int(num_keys), p_freq=p_freq)
            else:
                keys = wl.words(int(num_keys))
        except ValueError as e:
            st.error(f"❌ Could not generate keys: {e}")
        else:
            if replace:
                tree.make_empty()
            inserted, duplicates = tree.batch_insert(wl.pairs(keys))
            logger.info("Built tree: inserted=%d duplicates=%d", inserted, duplicates)
            st.success(f"✅ Inserted {inserted} keys ({duplicates} duplicates rejected). Size: {tree.size()}")

            lengths = pd.Series([len(k) for k in keys], name="length")
            fig = px.histogram(lengths, x="length", title="Key length distribution")
            st.plotly_chart(fig, use_container_width=True)

elif page == "Query & Remove":
    st.header("🔍 Query & Remove")

    key = st.text_input("Key", value="SPACE")
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        if st.button("Value"):
            try:
                if tree.contains(key):
                    st.info(f"`{key}` → {tree.value(key)!r}")
                else:
                    st.warning(f"`{key}` not found")
            except (TypeError, ValueError) as e:
                st.error(f"❌ {e}")

    with col2:
        raw = st.text_input("Value to insert", value="0")
        if st.button("Insert"):
            try:
                if tree.insert(key, raw):
                    st.success(f"✅ Inserted `{key}`")
                else:
                    st.warning(f"`{key}` already present; value kept")
            except (TypeError, ValueError) as e:
                st.error(f"❌ {e}")

    with col3:
        if st.button("Remove"):
            try:
                if tree.remove(key):
                    logger.info("Removed key=%s", key)
                    st.success(f"✅ Removed `{key}`")
                else:
                    st.warning(f"`{key}` not present; nothing removed")
            except (TypeError, ValueError) as e:
                st.error(f"❌ {e}")

    with col4:
        limit = st.number_input("Prefix matches", min_value=1, value=25)
        if st.button("Enumerate prefix"):
            try:
                matches = list(tree.enumerate_prefix(key, k=int(limit)))
            except TypeError as e:
                st.error(f"❌ {e}")
            else:
                st.write(f"**{len(matches)} match(es):**")
                st.write(matches)

    st.subheader("Current contents")
    df = pd.DataFrame(list(tree.items()), columns=["key", "value"])
    st.dataframe(df.head(500), use_container_width=True)
    st.caption(f"{tree.size()} keys, showing up to 500")

elif page == "Structure":
    st.header("🧬 Structure")

    tab1, tab2 = st.tabs(["Ordered print", "Pre-order dump"])

    with tab1:
        st.write("**Key/value pairs in key order:**")
        st.code(captured(tree.print) or "(empty)")

    with tab2:
        st.write("**Characters in pre-order (node, low, middle, high):**")
        st.code(captured(tree.print_all).strip() or "(empty)")

    if not tree.empty():
        depths = []
        stack = [(tree.root, 1)]
        while stack:
            node, depth = stack.pop()
            depths.append(depth)
            for child in (node.low, node.middle, node.high):
                if child is not None:
                    stack.append((child, depth + 1))
        counts = np.bincount(np.asarray(depths))[1:]
        fig = go.Figure()
        fig.add_trace(go.Bar(x=np.arange(1, len(counts) + 1), y=counts, name="nodes"))
        fig.update_layout(title="Nodes per depth", xaxis_title="Depth", yaxis_title="Nodes")
        st.plotly_chart(fig, use_container_width=True)

elif page == "Benchmark":
    st.header("⏱️ Benchmark")

    sizes_text = st.text_input("Sizes (comma separated)", value="1000, 5000, 10000")
    col1, col2, col3 = st.columns(3)
    with col1:
        repeats = st.number_input("Repeats", min_value=1, max_value=20, value=3)
    with col2:
        bench_freq = st.slider("Prefix frequency", 0.0, 1.0, 0.0, 0.05, key="bench_freq")
    with col3:
        bench_seed = st.number_input("Seed", min_value=0, value=0, key="bench_seed")

    if st.button("Run benchmark"):
        try:
            sizes = [int(s) for s in sizes_text.split(",") if s.strip()]
            config = BenchConfig(sizes=sizes, repeats=int(repeats),
                                 prefix_freq=bench_freq, seed=int(bench_seed))
        except ValueError as e:
            st.error(f"❌ Invalid configuration: {e}")
        else:
            with st.spinner("Running..."):
                raw = run_benchmark(config)
                summary = summarize(raw)
            st.session_state["bench"] = (raw, summary)

    if "bench" in st.session_state:
        raw, summary = st.session_state["bench"]

        tab1, tab2 = st.tabs(["Summary", "Raw runs"])
        with tab1:
            per_key = summary.melt(
                id_vars="n",
                value_vars=["insert_us_per_key", "lookup_us_per_key", "miss_us_per_key", "remove_us_per_key"],
                var_name="operation",
                value_name="us_per_key",
            )
            fig = px.line(per_key, x="n", y="us_per_key", color="operation", markers=True,
                          title="Microseconds per key")
            st.plotly_chart(fig, use_container_width=True)

            fig_nodes = px.bar(summary, x="n", y="nodes_per_key", title="Nodes per key")
            st.plotly_chart(fig_nodes, use_container_width=True)
            st.dataframe(summary, use_container_width=True)
        with tab2:
            st.dataframe(raw, use_container_width=True)

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Ternary Search Tree Bench
    </div>
    """,
    unsafe_allow_html=True
)
