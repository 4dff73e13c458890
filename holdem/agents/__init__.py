"""
Hold'em Agents - computer-controlled seats

This module provides the base agent interface, a check/call baseline and
the heuristic decision engine used for AI seats.
"""

from holdem.agents.base import BaseAgent, CallAgent
from holdem.agents.heuristic import HeuristicAgent, choose_action

__all__ = ["BaseAgent", "CallAgent", "HeuristicAgent", "choose_action"]
