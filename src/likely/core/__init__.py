"""Core numerical model: packed covariances, random sources, fit parameters and minima."""
