"""
Utility modules for ReviewLens.

Cross-cutting concerns:
- Storage: File I/O for annotated reviews, reports and summaries
"""
