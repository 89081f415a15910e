"""HTTP controllers — one router per resource."""
