"""
Shared Kernel Module
====================

This module contains shared infrastructure used across all bounded
contexts (Citizen Intake and Agency Administration).

Architecture Pattern: Modular Monolith
- Each module (intake, admin) is a bounded context
- Shared kernel contains only generic infrastructure
- Domain models are extended within each module

DO NOT add business logic from Intake or Admin to shared kernel.
"""

__version__ = "1.0.0"
