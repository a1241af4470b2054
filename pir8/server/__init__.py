"""HTTP host for PIR8 practice games."""
