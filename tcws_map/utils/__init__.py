"""Leaf-node helpers. No engine imports."""
