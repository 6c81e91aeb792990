"""Reviews app: traveler ratings of listings they stayed at."""
