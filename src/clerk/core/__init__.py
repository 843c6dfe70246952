"""
Time arithmetic and presentation.

Components:
- duration.py: HH:MM:SS formatting and event/task durations
- report.py: short and verbose task listings
- timer.py: the live counter behind `clerk start`
"""
