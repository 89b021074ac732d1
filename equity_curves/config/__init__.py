"""
Configuration loading and validation for simulation defaults.

Provides strongly typed settings objects populated from environment variables
(and an optional .env file) with upfront validation.
"""
