"""Rule functions applied by the state threader."""
