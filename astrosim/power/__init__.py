"""Power models: a simple battery."""