"""Core building blocks shared by the model and store layers."""
