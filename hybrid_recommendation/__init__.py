# hybrid_recommendation/__init__.py

"""
Hybrid product recommendation engine for the storefront.

- hybrid: engagement scoring, interaction map, the five scoring strategies
  and the weighted combiner (pure, no I/O).
- data: payload loading / validation, text preprocessing, demo data.
- service / interface: logged pipeline and the caller-facing dict API.
"""
