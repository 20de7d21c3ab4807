import sys

from agents.ai_model_tester_agent.graph import get_ai_model_tester_graph
from agents.scorer_analyzer_agent.graph import get_scorer_analyzer_graph
from graph_orchestrator import get_workflow_graph

GRAPHS = {
    "audit": get_workflow_graph,
    "model_tester": get_ai_model_tester_graph,
    "scorer": get_scorer_analyzer_graph,
}


def main():
    name = sys.argv[1] if len(sys.argv) > 1 else "audit"
    if name not in GRAPHS:
        print(f"Unknown graph '{name}'. Choose one of: {', '.join(GRAPHS)}")
        sys.exit(1)

    print(f"Generating {name} graph visualization...")
    graph = GRAPHS[name]()

    try:
        # Note: This might require internet access to hit the mermaid.ink API
        png_bytes = graph.get_graph().draw_mermaid_png()

        output_file = f"{name}_graph.png"
        with open(output_file, "wb") as f:
            f.write(png_bytes)

        print(f"Success! Graph visualization saved to {output_file}")

    except Exception as e:
        print(f"Error generating PNG: {e}")
        print("\nFalling back to Mermaid syntax. You can paste this into https://mermaid.live/ :\n")
        print(graph.get_graph().draw_mermaid())


if __name__ == "__main__":
    main()
