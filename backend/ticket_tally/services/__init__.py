"""Business services over the collection repository."""
