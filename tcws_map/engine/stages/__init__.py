"""Format stages, one per module, registered on import.

Order (each depends on the previous):
  S1.01 colour areas    S2.01 bounding box    S3.01 crop
  S4.01 clip mask       S4.02 background      S5.01 rescale
  S6.01 overlay
"""
