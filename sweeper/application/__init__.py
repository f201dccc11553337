"""Application layer: sweep use cases, services, ports and result DTOs."""
