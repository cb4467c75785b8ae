"""HTTP surface: status file server and the plaintext redirect server."""
