"""MediaGen: job execution engine for generative-media provider APIs."""

__version__ = "0.1.0"
