"""Settings services and the host interfaces they depend on."""
