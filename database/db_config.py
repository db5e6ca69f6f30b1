# Single importer, a handful of connections is plenty
minPoolSize : int   = 0
maxPoolSize : int   = 5
maxIdleTimeMS : int = 45000

# Failover & Timeouts
serverSelectionTimeoutMS : int = 30000 # never longer than the run deadline
connectTimeoutMS : int         = 10000
socketTimeoutMS  : int         = 30000
