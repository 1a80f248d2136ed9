"""Multi-agent PRD generation swarm."""

__version__ = "0.1.0"
