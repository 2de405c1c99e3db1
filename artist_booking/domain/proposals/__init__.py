"""Proposals domain - Artist bids and the hiring transition"""
