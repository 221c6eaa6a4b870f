"""Lambda handler for the Store API using Mangum."""
from mangum import Mangum

from store_api.main import create_app
from store_api.settings import get_settings

# Settings are read once per cold start; a missing s3_bucket fails here
app = create_app(get_settings())

# Wrap with Mangum for Lambda compatibility
handler = Mangum(app, lifespan="off")

# Export handler for Lambda runtime
lambda_handler = handler
