"""ASGI server layer — request pipeline, negotiation, and pounce runner."""
