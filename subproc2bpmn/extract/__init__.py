"""Subprocess extraction engine"""
