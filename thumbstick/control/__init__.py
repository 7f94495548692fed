"""Host-facing layer: the controller and the scene adapter."""
