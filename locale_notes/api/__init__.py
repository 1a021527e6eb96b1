"""
HTTP surface for driving a Locale session.

Design intent:
- Stand in for the view layer (forms, popovers, alerts).
- Let the simulated platform collaborators be fed from outside the process.
"""
