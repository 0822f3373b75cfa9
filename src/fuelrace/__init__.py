"""Fuel race simulator: cars and motorcycles racing on a limited tank."""
