"""Ratings domain - Artist reputation aggregate"""
