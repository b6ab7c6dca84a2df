"""
Study: Quiz Roster

One behavior set, many users.

Questions to explore:
- Do paid users really reach base behavior through the chain?
- Can a shared operation act on an object that was never a user?
- What does a roster look like after a few rounds?
"""
