"""Demo datasets: the fixed sample fleet and bulk loading into the store."""
