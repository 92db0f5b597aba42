"""Reference optimizer driver: iteration state, callbacks and the run loop."""
