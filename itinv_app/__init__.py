"""
IT Inventory App - Device, Repair and Budget Consistency Engine

Tracks IT devices, their repair history and budget allocation against
spending categories. Keeps device status consistent with open repairs and
cascades category renames into every referencing record and budget map.
"""

__version__ = "0.1.0"
__author__ = "IT Inventory Team"
