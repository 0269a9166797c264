"""
Shared constants, time sources, and helper utilities.

Centralizes joint limits, scene geometry, sequencing constants, and small
stateless helpers used across the robosim package.
"""
