"""
Contact App

Handles contact form submissions from the portfolio site:
- Public contact form submission with rate limiting
- Listing, lookup and status tracking of submissions
- Validation and sanitization of user input
"""
