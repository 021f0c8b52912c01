"""
Points On Order Example

Award points when an order is created, validating the order first.
"""
import asyncio

from temify.core import Event, EventBus, EventMetadata, Rules, ValidationError, Validator

order_validator = (
    Validator()
    .rule(Rules.required("order_id"))
    .rule(Rules.min("total", 0))
    .rule(Rules.max("total", 10_000))
)


async def main():
    bus = EventBus(failure_hook=lambda event, failures: print(f"{len(failures)} listener(s) failed"))
    balances: dict[str, int] = {}

    def award_points(event):
        balances[event.player_id] = balances.get(event.player_id, 0) + event.payload["total"] // 10
        bus.emit(event.caused("points.awarded", {"balance": balances[event.player_id]}))

    async def notify(event):
        await asyncio.sleep(0.1)  # Pretend to call a push service
        print(f"Notified {event.player_id}: {event.payload}")

    bus.subscribe("order.created", award_points)
    bus.subscribe("points.awarded", notify)
    bus.subscribe("*", lambda event: print(f"Audit: {event.type}"))

    for order in ({"order_id": "o-1", "total": 120}, {"order_id": "", "total": -5}):
        try:
            order_validator.validate_or_throw(order)
        except ValidationError as e:
            print(f"Rejected order: {[err.message for err in e.details['errors']]}")
            continue

        bus.emit(
            Event(
                type="order.created",
                player_id="player-1",
                payload=order,
                metadata=EventMetadata(correlation_id=order["order_id"], source="shop"),
            )
        )

    # Give detached listeners time to finish
    await asyncio.sleep(0.2)
    print(f"Balances: {balances}")


if __name__ == "__main__":
    asyncio.run(main())
