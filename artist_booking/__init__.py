"""Artist booking API - gigs, proposals, completion, ratings and messaging"""
