"""Pure booking rules: conflict detection and pricing. No Django imports."""
