"""Output generation: treemap surfaces, vignette shading, and the render pipeline."""
