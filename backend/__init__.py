"""SwasthyaLink backend: health assistant chat and family network APIs."""
