"""
DiffClip

Turns uncommitted (or inter-branch) git changes into a readable report,
optionally condenses it into a commit message with an LLM, and copies the
result to the clipboard.
"""

__version__ = "0.1.0"
__author__ = "DiffClip Team"

__all__ = [
    "__version__",
    "__author__",
]
