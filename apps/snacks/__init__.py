"""
Snacks App - Snack Requests and Voting

Users propose snacks, vote them up or down, and every request is assigned
to the monthly order cycle it will be bought in.

Architecture:
- Models: SnackRequest
- Order cycles: order_cycle (pure calendar rules)
- Voting: voting (pure tally rules), services.voting (persisted votes)
- Feed: live, cancellable request snapshots
- Views: RESTful API with a ViewSet plus a Server-Sent Events stream
"""
