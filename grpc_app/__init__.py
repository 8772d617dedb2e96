"""gRPC transport layer for the payments service.

This package hosts:
- Generated `payments.v1` protobuf messages and stubs (see protos/).
- Mappers between protobuf messages and domain objects.
- Server bootstrap and interceptors.
- A thin servicer that maps RPC requests onto the PaymentProcessor.
"""
