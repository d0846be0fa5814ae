"""FlightSurety oracle node and dapp client."""
