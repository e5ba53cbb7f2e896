"""Mini FP&A service: versioned scenarios, cloning and scenario comparison."""
