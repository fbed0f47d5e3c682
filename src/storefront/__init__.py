"""Storefront commerce domain: cart, pricing, orders, tracking and notifications."""
