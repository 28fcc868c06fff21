"""Command-line interface for running career terms interactively"""
