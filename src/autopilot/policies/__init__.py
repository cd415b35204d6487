# src/autopilot/policies/__init__.py
"""Heading policies for headless runs: state -> (dx, dy)."""

from src.autopilot.policies.random import policy_random
from src.autopilot.policies.greedy import policy_greedy
from src.autopilot.policies.autopilot import policy_autopilot

POLICIES = {
    "autopilot": policy_autopilot,
    "greedy": policy_greedy,
    "random": policy_random,
}

__all__ = ["policy_random", "policy_greedy", "policy_autopilot", "POLICIES"]
