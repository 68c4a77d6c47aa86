from __future__ import annotations
import streamlit as st
import pandas as pd
import numpy as np
from typing import List
import matplotlib.pyplot as plt
import networkx as nx
import io

from keyword_rank.datatypes import Keyword, Token
from keyword_rank.preprocessing import CandidateFilter, parse_tagged_text
from keyword_rank.graphing import Graph, build_pairs, build_graph
from keyword_rank.scoring import RankConfig, rank_with_trace
from keyword_rank.keywords import TextRank, sort_keywords

SAMPLE_TEXT = "나무/NNG 를/JKO 심/VV 고/EC 꽃잎/NNG 이/JKS 피어나/VV 는/ETM 정원/NNG 에/JKB 나무/NNG 가/JKS 있/VV 다/EF"

def load_text_from_file(uploaded_file) -> str:
    """Load tagged text from an uploaded file (one or many surface/TAG items per line)."""
    return uploaded_file.read().decode("utf-8")

def draw_graph_visualization(graph: Graph, keywords: List[Keyword]):
    """Draw the co-occurrence graph, highlighting the selected keywords."""
    G = graph.to_networkx()
    fig, ax = plt.subplots(figsize=(10, 8))
    ax.set_title("Co-occurrence Graph", fontsize=14, fontweight='bold')

    if len(G.nodes) > 0:
        pos = nx.spring_layout(G, k=2, iterations=50, seed=42)
        selected = {k.surface for k in keywords}
        colors = ['gold' if n in selected else 'lightblue' for n in G.nodes()]
        nx.draw_networkx_nodes(G, pos, ax=ax, node_color=colors, node_size=900, alpha=0.8)

        weights = [d['weight'] for _, _, d in G.edges(data=True)]
        if weights:
            max_weight = max(weights)
            nx.draw_networkx_edges(G, pos, ax=ax,
                                   width=[3 * (w / max_weight) for w in weights],
                                   alpha=0.6,
                                   edge_color='gray')
        nx.draw_networkx_labels(G, pos, ax=ax, font_size=10)

        if len(G.nodes) <= 15:
            edge_labels = {(u, v): f"{d['weight']:g}" for u, v, d in G.edges(data=True)}
            nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=ax, font_size=8)

    ax.axis('off')
    plt.tight_layout()

    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    plt.close()
    return buf

def create_sidebar_controls():
    """Create sidebar controls for parameters."""
    st.sidebar.header("Parameters")
    window = st.sidebar.slider("Window size", min_value=2, max_value=10, value=5, step=1,
                               help="Tokens within this window co-occur")
    num_keywords = st.sidebar.slider("Keywords", min_value=1, max_value=50, value=10, step=1)
    damping = st.sidebar.slider("Damping", min_value=0.5, max_value=0.95, value=0.85, step=0.05)
    max_steps = st.sidebar.slider("Max steps", min_value=1, max_value=100, value=10, step=1)

    st.sidebar.header("Debug Options")
    debug_mode = st.sidebar.checkbox("Enable Debug Mode", value=True, help="Show detailed pipeline steps")

    return window, num_keywords, RankConfig(damping=damping, max_steps=max_steps), debug_mode

def debug_pipeline(tokens: List[Token], window: int, num_keywords: int, rank_config: RankConfig) -> List[Keyword]:
    """Run the pipeline showing each intermediate result."""
    cfg = CandidateFilter()

    st.header("Step 1: Candidate Filtering")
    with st.expander("Candidate Details", expanded=True):
        token_rows = [{
            "#": i + 1,
            "Surface": t.surface,
            "Tag": t.tag,
            "Stop Token": "✅" if cfg.is_stop_token(t) else "",
            "Candidate": "✅" if cfg.is_candidate(t) else "❌",
        } for i, t in enumerate(tokens)]
        st.dataframe(pd.DataFrame(token_rows), use_container_width=True)
        st.metric("Candidates", sum(1 for t in tokens if cfg.is_candidate(t)))

    st.header("Step 2: Co-occurrence Pairs")
    with st.expander("Pair Counts", expanded=True):
        pairs = build_pairs(tokens, window, cfg)
        if len(pairs):
            pair_rows = [{"Word A": a, "Word B": b, "Count": c} for (a, b), c in pairs.items()]
            st.dataframe(pd.DataFrame(pair_rows), use_container_width=True)
        else:
            st.warning("No candidate pairs inside the window")

    st.header("Step 3: Graph Construction")
    graph = build_graph(pairs)
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Nodes", len(graph))
    with col2:
        st.metric("Edges", sum(1 for _ in graph.edges()))

    st.header("Step 4: Ranking")
    with st.expander("Ranking Details", expanded=True):
        scores, trace = rank_with_trace(graph, damping=rank_config.damping,
                                        min_diff=rank_config.min_diff, max_steps=rank_config.max_steps)
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Steps", trace.steps)
        with col2:
            st.metric("Converged", "yes" if trace.converged else "no")
        with col3:
            st.metric("Max Raw Weight", f"{trace.max_rank:.4f}")
        if trace.step_sums:
            st.line_chart(pd.DataFrame({"Weight Sum": np.array(trace.step_sums)}))
        rank_rows = [{
            "Node": node,
            "Out Weight": graph.out_weight_sum(node),
            "Raw Weight": f"{trace.raw_weights[node]:.5f}",
            "Score": f"{scores[node]:.5f}",
        } for node in sorted(scores)]
        if rank_rows:
            st.dataframe(pd.DataFrame(rank_rows), use_container_width=True)

    keywords = sort_keywords(scores, num_keywords)

    if 0 < len(graph) <= 50:
        try:
            st.image(draw_graph_visualization(graph, keywords), caption="Keywords in gold",
                     use_container_width=True)
        except Exception as e:
            st.error(f"Could not generate graph visualization: {str(e)}")
    return keywords

def main():
    st.title("TextRank Keyword Extractor")
    st.write("Paste or upload POS-tagged text written as surface/TAG items")

    window, num_keywords, rank_config, debug_mode = create_sidebar_controls()

    uploaded_file = st.file_uploader("Choose a tagged text file", type=['txt'])
    default_text = load_text_from_file(uploaded_file) if uploaded_file is not None else SAMPLE_TEXT
    text = st.text_area("Tagged text", default_text, height=200)

    if st.button("Extract Keywords", type="primary"):
        try:
            tokens = parse_tagged_text(text)
            if debug_mode:
                st.markdown("---")
                st.title("Pipeline Debug Mode")
                keywords = debug_pipeline(tokens, window, num_keywords, rank_config)
            else:
                with st.spinner("Ranking..."):
                    keywords = TextRank(window_size=window, rank_config=rank_config).extract_keywords(tokens, num_keywords)

            st.markdown("---")
            st.header("Keywords")
            if keywords:
                st.dataframe(pd.DataFrame(keywords, columns=["Keyword", "Score"]), use_container_width=True)
            else:
                st.warning("No keywords found")
        except Exception as e:
            st.error(f"Error extracting keywords: {str(e)}")
            st.exception(e)

if __name__ == "__main__":
    main()
