"""HTTP plumbing: request building, response decoding and the httpx transport."""
