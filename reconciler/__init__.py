"""Company Opening Reconciler.

Searches a job board for configured role queries and flags the reference
companies that currently have a matching open posting.
"""

__version__ = "1.0.0"
