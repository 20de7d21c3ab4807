"""
AI Model Tester Agent

A LangGraph-based agent that sends audit prompts to ChatGPT, Perplexity
and Google AI Overviews and detects the audited brand in each answer.
"""

from agents.ai_model_tester_agent.graph import run_ai_model_testing_workflow
from agents.ai_model_tester_agent.utils import query_platform


__all__ = ["run_ai_model_testing_workflow", "query_platform"]
