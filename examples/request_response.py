#!/usr/bin/env python3
"""Request/response example for autosar_e2e.

This example demonstrates:
1. Protecting client requests and server responses with Profile 4M
2. Reporting a server-side error through the message result
3. Rejecting a message that came from the wrong source
"""

from __future__ import annotations

from autosar_e2e import E2EError, Profile4Config, Profile4M

HEADER_LENGTH = 16
FRAME_LENGTH = 32

CLIENT_ID = 0x0C1
SERVER_ID = 0x5E7

REQUEST, RESPONSE = 0, 1
RESULT_OK, RESULT_ERROR = 0, 1


def make_frame(payload: bytes) -> bytearray:
    """Place the payload after the extended Profile 4M header."""
    frame = bytearray(FRAME_LENGTH)
    frame[HEADER_LENGTH : HEADER_LENGTH + len(payload)] = payload
    return frame


def main() -> None:
    """Run the request/response example."""
    print("=" * 60)
    print("autosar_e2e Request/Response Example")
    print("=" * 60)
    print()

    config = Profile4Config(data_id=0x4D4D)

    # Each direction has its own sender/receiver pair
    client_tx = Profile4M(config, message_type=REQUEST, source_id=CLIENT_ID)
    server_rx = Profile4M(config, message_type=REQUEST, source_id=CLIENT_ID)
    server_tx = Profile4M(config, message_type=RESPONSE, source_id=SERVER_ID)
    client_rx = Profile4M(config, message_type=RESPONSE, source_id=SERVER_ID)

    print("1. Client sends a request...")
    request = make_frame(b"GET speed")
    client_tx.protect(request)
    print(f"   Header: {request[:HEADER_LENGTH].hex(' ')}")
    print(f"   Server check: {server_rx.check(request).name}")
    print()

    print("2. Server answers...")
    response = make_frame(b"1234 rpm")
    server_tx.protect(response)
    print(f"   Header: {response[:HEADER_LENGTH].hex(' ')}")
    print(f"   Client check: {client_rx.check(response).name}")
    print()

    print("3. Server reports an error...")
    server_tx.message_result = RESULT_ERROR
    error = make_frame(b"sensor offline")
    server_tx.protect(error)
    print(f"   Client expecting OK result: {client_rx.check(error).name}")
    client_rx.message_result = RESULT_ERROR
    server_tx.protect(error)
    print(f"   Client expecting error result: {client_rx.check(error).name}")
    print()

    print("4. A frame from another source...")
    impostor = Profile4M(config, message_type=RESPONSE, source_id=0x999)
    fresh_client_rx = Profile4M(config, message_type=RESPONSE, source_id=SERVER_ID)
    frame = make_frame(b"spoofed")
    impostor.protect(frame)
    print(f"   Client check: {fresh_client_rx.check(frame).name}")
    print()

    print("5. A buffer too short for the header...")
    try:
        client_tx.protect(bytearray(12))
    except E2EError as e:
        print(f"   ✓ Rejected: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
