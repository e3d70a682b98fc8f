from datetime import datetime, timezone

import ksuid
from ksuid import Configuration, Ksuid, PrefixedKsuid


def run_example():
    print("--- KSUID: Basic Example ---")

    # 1. Generate a KSUID for now
    value = ksuid.new()
    print(f"KSUID:     {value}")
    print(f"Raw:       {value.raw_hex()}")
    print(f"Time:      {value.to_time().isoformat()}")
    print(f"Timestamp: {value.to_int()}")
    print(f"Payload:   {value.payload_hex()}")

    # 2. Parse it back from text and bytes
    assert Ksuid.from_base62(str(value)) == value
    assert Ksuid.from_bytes(bytes(value)) == value

    # 3. Same second, different payloads: sorted together, never equal
    when = datetime(2017, 10, 29, 21, 18, 1, tzinfo=timezone.utc)
    first = ksuid.new(time=when)
    second = ksuid.new(time=when)
    print(f"Same second: compare={first.compare(second)}, equal={first == second}")

    # 4. Prefixed KSUIDs group by prefix
    events = [ksuid.prefixed("evt_"), ksuid.prefixed("cus_"), ksuid.prefixed("evt_")]
    for item in sorted(events):
        print(f"  {item}")

    # 5. Deterministic payloads with an injected configuration
    zeros = Configuration(lambda: bytes(16))
    print(f"Zero payload: {PrefixedKsuid.generate('tst_', time=when, config=zeros)}")


if __name__ == "__main__":
    run_example()
