"""
Scorer Analyzer Agent

A LangGraph-based agent that turns annotated AI answers into a visibility
score, competitor ranking, content gaps and recommendations.
"""

from agents.scorer_analyzer_agent.graph import run_scorer_analysis_workflow


__all__ = ["run_scorer_analysis_workflow"]
