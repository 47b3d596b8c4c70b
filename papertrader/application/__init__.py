"""Application layer: contracts the engine needs from external collaborators."""
