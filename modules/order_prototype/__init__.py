"""
Order Prototype Module
======================

Responsibility:
- Order snapshot aggregating priced products, flat discounts and delivery cost.
- Deep duplication for independent what-if edits.
"""

from .order import Product, Discount, Order

__all__ = ['Product', 'Discount', 'Order']
