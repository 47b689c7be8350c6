"""Pay Cal - payroll calendar and paperwork deadline tools."""

__version__ = "0.1.0"
