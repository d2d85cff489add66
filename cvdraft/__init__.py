"""cv-drafter: LLM-assisted CV and covering letter drafting."""

__version__ = "0.1.0"
