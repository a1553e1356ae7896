"""Core Application Layer: the request pipeline, the per-resource endpoint
services built on it, and the command handler used by the CLI.
"""
