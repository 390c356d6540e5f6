"""Fitness Club package.

This package is organized by feature modules (clients, subscriptions, visits,
attendance, ...) with a thin Flask controller layer and service/repository
layers underneath.
"""
