"""Faber core: concepts, contexts, overlays, config and bindings."""
