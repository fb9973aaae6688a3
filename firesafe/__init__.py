"""FireSafe inspection report renderer.

Turns NFPA 25 style inspection form data into paginated PDF reports.
"""

__version__ = "1.0.0"
