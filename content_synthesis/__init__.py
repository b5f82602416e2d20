"""
Content Synthesis & Quality Pipeline.

Turns storage folders and topic briefs into structured content records
through a chain of text-generation providers, scores existing content for
naturalness and rewrites it to raise that score, in batches that tolerate
per-item failures.
"""

__version__ = "1.0.0"
__author__ = "Content Synthesis Team"
