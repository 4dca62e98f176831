"""
Configuration loading and validation.

Provides strongly typed settings objects read from environment variables with
upfront validation.
"""
