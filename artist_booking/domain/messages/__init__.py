"""Messages domain - Per-proposal conversations"""
