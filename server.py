import os
import ssl

from authapp.main import create_app

if __name__ == '__main__':
    app = create_app()

    # Check for SSL certificates
    cert_dir = os.path.join(os.path.dirname(__file__), 'certs')
    cert_file = os.path.join(cert_dir, 'cert.pem')
    key_file = os.path.join(cert_dir, 'key.pem')

    ssl_context = None
    if os.path.exists(cert_file) and os.path.exists(key_file):
        with open(cert_file, 'r') as f:
            if 'BEGIN CERTIFICATE' in f.read():
                ssl_context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
                ssl_context.load_cert_chain(cert_file, key_file)

    if ssl_context is None:
        # Use Flask's adhoc SSL
        ssl_context = 'adhoc'

    port = int(os.getenv('PORT', '5000'))

    print('')
    print('=' * 60)
    print(f'  {app.config["APP_NAME"].upper()} SERVER')
    print('=' * 60)
    print('')
    print('  Open your browser to:')
    print('')
    print(f'    https://localhost:{port}')
    print('')
    print('  Note: Accept the security warning (self-signed cert)')
    print('')
    print('  Press Ctrl+C to stop the server')
    print('=' * 60)
    print('')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=app.config['DEBUG'],
        ssl_context=ssl_context
    )
