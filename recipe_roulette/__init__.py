"""
Random Recipe viewer core package.

This package contains:
- config: Environment-driven Edamam configuration
- models: NormalizedRecipe and FetchState
- connectors: Provider connectors (Edamam)
- search: Bounded multi-page pool builder
- presenter: Random selection and view state
"""
