"""Command line interface for seopanel"""
