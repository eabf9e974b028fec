"""
Vocab Drill - Spaced-Repetition Vocabulary Drilling Tool

Schedules vocabulary review across days with a fixed level ladder and
orders items within a single sitting with an expanding-interval queue.
"""

__version__ = "1.0.0"
__author__ = "Vocab Drill Contributors"
