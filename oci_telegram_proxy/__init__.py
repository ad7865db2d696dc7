"""Pacote do proxy de alarmes do Oracle Cloud (OCI Notifications) -> Telegram.

Este pacote contém:
- constants: variáveis de ambiente e configuração
- errors: erros do fluxo de requisição (cada um com status HTTP)
- utils: helpers de acesso seguro ao JSON e formatação
- models: registro de alarme (todos os campos opcionais)
- parsing: parse tolerante do corpo (com reparo de aspas não escapadas)
- detection: classificação da requisição e handshake de assinatura
- formatters: renderização da mensagem em Markdown
- services: integração com serviços externos (Telegram, URL de confirmação)
- handler: pipeline puro (método, headers, corpo, config) -> (texto, status)
- controller: criação do Flask app e endpoints
"""
