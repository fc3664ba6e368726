"""Experiment harness and reporting for the coffee shop simulation."""
