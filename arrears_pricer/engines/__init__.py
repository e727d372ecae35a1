from .convexity import ConvexityEngine, PriceResult
