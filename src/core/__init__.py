"""Core domain package for dmgate.

Core contains the admission decision, its caches, and phone normalization
without any transport or agent-specific code, keeping the business logic
portable.
"""
