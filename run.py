from pixcode import create_app
import os


def main():
    app = create_app()

    app.run(debug=os.environ.get('FLASK_DEBUG') == '1',
            host=os.environ.get('HOST', '127.0.0.1'),
            port=int(os.environ.get('PORT', 5004)),
            use_reloader=False)


if __name__ == '__main__':
    main()
