"""skills-to-agents: keep the <skills> index of an agents document in sync with skill folders."""

__version__ = "0.1.0"
