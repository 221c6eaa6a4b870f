"""HTTP front door for a DynamoDB record store and an S3 upload bucket."""
