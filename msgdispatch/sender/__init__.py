"""Target resolution, dispatch and the sender facade."""
