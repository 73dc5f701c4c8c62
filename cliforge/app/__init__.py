"""Application support: error types, data paths, TOML configuration and HTTP clients."""