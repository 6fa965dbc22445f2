"""
Endpoints de backend do painel.

Handlers JSON chamados pelo próprio painel (e pelo Notificador):
envio de email livre, emails automáticos de instalação e link do n8n.
"""
