"""Subcommands of the graphlayout command line"""
