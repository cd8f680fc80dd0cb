"""
Fleet Core
==========
Role capabilities, business-unit scoping and fuel-event validation for the
fleet/fuel back office.

Sub-packages:
    permissions  Role -> permission table and identity queries
    identity     Identity value object
    context      Business units, Scope and the scope resolver
    state        Observable cells, session/scope stores, storage adapters
    sync         Change-driven scope synchronization and collaborator contracts
    policy       Fuel-event validation rules and thresholds
    lifecycle    Fuel-event state machine
    time         Injectable clock
"""

__version__ = "0.4.0"
