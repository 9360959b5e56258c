"""Input/output of ballots in textual form.

This subpackage is structured into modules by format. The ``text`` module
reads and writes the plain-text ballot notation (``A > B = C * 3``).
"""
