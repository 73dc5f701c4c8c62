"""Uniform JSON responses for agent-friendly command output."""