"""Membership plans app package.

Plans describe what a member pays monthly and which perks come with it.
Users reference at most one plan.
"""
