"""Completion domain - Completion requests and venue confirmation"""
