"""Gigs domain - Venue gig postings and artist browsing"""
